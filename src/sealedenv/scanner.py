"""
Encryption scanning over variable stores.

These functions walk a `VariableStore` depth-first in insertion order and act
on leaves whose value carries the ``encrypted:`` marker:

- `is_encrypted`: find the public key the store's ciphertexts were sealed for
- `collect_encrypted_values`: gather ciphertext payloads for an external decryptor
- `decrypt_in_place`: open every ciphertext with a local key pair
- `replace_encrypted_values`: substitute plaintexts looked up by ciphertext

A leaf named ``DOTENV_PUBLIC_KEY`` is the sentinel holding the public key. It is
never treated as a ciphertext, whatever its value.

Typical out-of-process flow:

```python
public_key = is_encrypted(store)
if public_key:
    ciphertexts = collect_encrypted_values(store)
    plaintexts = remote_key_holder.open(public_key, ciphertexts)
    if replace_encrypted_values(store, plaintexts):
        raise DecryptionFailed("Some values could not be decrypted")
```
"""

import logging
from collections.abc import Mapping

from .crypto.codec import decrypt, is_encrypted_value, strip_marker
from .exceptions import MissingPublicKey
from .models import KeyPair
from .store import VariableStore

logger = logging.getLogger(__name__)

PUBLIC_KEY_NAME = "DOTENV_PUBLIC_KEY"


def _is_sentinel(segments: tuple[str, ...]) -> bool:
    return segments[-1] == PUBLIC_KEY_NAME


def is_encrypted(store: VariableStore, public_key: str | None = None) -> str | bool:
    """Detect ciphertexts and return the public key they were sealed for.

    The first non-empty sentinel found becomes the candidate key, unless
    `public_key` already supplies one.

    Args:
        store: Store to scan
        public_key: Optional candidate key that takes precedence over sentinels

    Returns:
        The public key if any value is encrypted, False otherwise

    Raises:
        MissingPublicKey: If encrypted values exist but no public key is known
    """
    candidate = public_key or None
    encrypted_count = 0
    for segments, value in store.leaves():
        if _is_sentinel(segments):
            if value and candidate is None:
                candidate = value
            continue
        if is_encrypted_value(value):
            encrypted_count += 1

    if not encrypted_count:
        return False
    if not candidate:
        raise MissingPublicKey(
            f"Found {encrypted_count} encrypted value(s) but {PUBLIC_KEY_NAME} is missing or empty"
        )
    logger.debug(f"Store holds {encrypted_count} encrypted value(s)")
    return candidate


def collect_encrypted_values(store: VariableStore) -> set[str]:
    """Return the distinct ciphertext payloads (marker removed) in the store."""
    return {
        strip_marker(value)
        for segments, value in store.leaves()
        if not _is_sentinel(segments) and is_encrypted_value(value)
    }


def decrypt_in_place(store: VariableStore, key_pair: KeyPair) -> int:
    """Decrypt every encrypted leaf with a local key pair.

    All values are decrypted before the first write, so a failure leaves the
    store untouched.

    Returns:
        Number of values decrypted

    Raises:
        DecryptionFailed: On the first value that does not open
    """
    decrypted = [
        (segments, decrypt(value, key_pair))
        for segments, value in store.leaves()
        if not _is_sentinel(segments) and is_encrypted_value(value)
    ]
    for segments, plaintext in decrypted:
        store.write_segments(segments, plaintext)
    logger.debug(f"Decrypted {len(decrypted)} value(s) in place")
    return len(decrypted)


def replace_encrypted_values(store: VariableStore, decrypted: Mapping[str, str]) -> bool:
    """Replace ciphertexts with plaintexts looked up by payload.

    Args:
        store: Store to update
        decrypted: Mapping of ciphertext payload (marker removed) to plaintext

    Returns:
        True if at least one value is still encrypted afterwards
    """
    still_encrypted = False
    for segments, value in store.leaves():
        if _is_sentinel(segments) or not is_encrypted_value(value):
            continue
        plaintext = decrypted.get(strip_marker(value))
        if plaintext is None:
            still_encrypted = True
            continue
        store.write_segments(segments, plaintext)
    return still_encrypted
