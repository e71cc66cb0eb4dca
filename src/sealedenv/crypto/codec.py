"""
Sealed-box codec.

Stateless helpers around libsodium's anonymous sealed boxes (Curve25519
ephemeral Diffie-Hellman followed by XSalsa20-Poly1305), accessed through
PyNaCl. Encrypted values travel as text:

    encrypted:<base64 of the sealed box>

Keys and payloads use the standard padded base64 alphabet (``+`` and ``/``).
"""

import base64
import binascii
import logging
from types import ModuleType

from ..exceptions import CryptoUnavailable, DecryptionFailed, InvalidKey
from ..models import KeyPair

logger = logging.getLogger(__name__)

ENCRYPTED_PREFIX = "encrypted:"
KEY_SIZE = 32


def _load_sodium() -> tuple[ModuleType, ModuleType]:
    """Import the PyNaCl modules providing sealed boxes."""
    try:
        from nacl import exceptions, public
    except ImportError as e:
        raise CryptoUnavailable(
            "PyNaCl is required for sealed-box encryption. Install with: pip install pynacl"
        ) from e
    return public, exceptions


def is_encrypted_value(value: object) -> bool:
    """Check whether a value carries the ``encrypted:`` marker."""
    return isinstance(value, str) and value.startswith(ENCRYPTED_PREFIX)


def strip_marker(value: str) -> str:
    """Return the base64 payload of an encrypted value."""
    return value[len(ENCRYPTED_PREFIX) :]


def base64_encode(data: bytes | str) -> str:
    """Encode bytes (or UTF-8 text) with the standard padded alphabet."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def base64_decode(value: str) -> bytes:
    """Decode standard padded base64, rejecting anything outside the alphabet.

    Raises:
        ValueError: If the value is not valid padded base64
    """
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError(f"Invalid base64 data: {e}") from e


def _decode_key(value: str, kind: str) -> bytes:
    if not value:
        raise InvalidKey(f"The {kind} key is empty")
    try:
        raw = base64_decode(value)
    except ValueError as e:
        raise InvalidKey(f"The {kind} key is not valid base64") from e
    if len(raw) != KEY_SIZE:
        raise InvalidKey(f"The {kind} key must decode to {KEY_SIZE} bytes, got {len(raw)}")
    return raw


def generate_key_pair() -> KeyPair:
    """Generate a fresh Curve25519 key pair.

    Returns:
        KeyPair with both halves base64 encoded

    Raises:
        CryptoUnavailable: If PyNaCl cannot be loaded
    """
    public, _ = _load_sodium()
    private_key = public.PrivateKey.generate()
    key_pair = KeyPair(
        public_key=base64_encode(bytes(private_key.public_key)),
        private_key=base64_encode(bytes(private_key)),
    )
    logger.debug("Generated a new sealed-box key pair")
    return key_pair


def encrypt(plaintext: str, public_key: str) -> str:
    """Seal a value for the holder of `public_key`.

    Every call uses a new ephemeral key, so encrypting the same value twice
    yields two different results.

    Args:
        plaintext: Value to encrypt
        public_key: Base64 encoded receiver public key

    Returns:
        ``encrypted:`` followed by the base64 sealed box
    """
    public, _ = _load_sodium()
    receiver = public.PublicKey(_decode_key(public_key, "public"))
    ciphertext = public.SealedBox(receiver).encrypt(plaintext.encode("utf-8"))
    return ENCRYPTED_PREFIX + base64_encode(ciphertext)


def decrypt(value: str, key_pair: KeyPair) -> str:
    """Open an encrypted value; unmarked values are returned unchanged.

    Args:
        value: A plaintext value or an ``encrypted:`` value
        key_pair: Key pair whose public half the value was sealed for

    Returns:
        The plaintext

    Raises:
        DecryptionFailed: If the sealed box does not authenticate, the payload is
            malformed, or the public key does not belong to the private key
        InvalidKey: If the key material is malformed
        CryptoUnavailable: If PyNaCl cannot be loaded
    """
    if not is_encrypted_value(value):
        return value

    public, nacl_exceptions = _load_sodium()
    try:
        ciphertext = base64_decode(strip_marker(value))
    except ValueError as e:
        raise DecryptionFailed("Encrypted value payload is not valid base64") from e

    public_bytes = _decode_key(key_pair.public_key, "public")
    receiver = public.PrivateKey(_decode_key(key_pair.private_key.get_secret_value(), "private"))
    try:
        if bytes(receiver.public_key) != public_bytes:
            raise DecryptionFailed("The public key does not belong to the private key")
        try:
            opened = public.SealedBox(receiver).decrypt(ciphertext)
        except nacl_exceptions.CryptoError as e:
            raise DecryptionFailed(
                "Sealed box could not be opened: wrong key or corrupted data"
            ) from e
    finally:
        del receiver

    try:
        return opened.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionFailed("Decrypted value is not valid UTF-8") from e
