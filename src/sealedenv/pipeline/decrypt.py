"""
Decryption of parsed entry sequences.

`decrypt_entries` sits between the parser and the commit step: it detects
sealed values, asks a `Decryptor` for the plaintexts and returns a new entry
list in which every ciphertext has been replaced. Either every ciphertext is
resolved or `DecryptionFailed` is raised; the commit step never sees a
partially decrypted sequence.
"""

import logging
from collections.abc import Iterable, Mapping

from ..crypto.codec import ENCRYPTED_PREFIX, decrypt, is_encrypted_value, strip_marker
from ..exceptions import DecryptionFailed
from ..models import KeyPair
from ..providers import KeyProvider
from ..scanner import PUBLIC_KEY_NAME, collect_encrypted_values, is_encrypted
from ..store import VariableStore
from .entries import Decryptor, Entry

logger = logging.getLogger(__name__)


def _entry_store(entries: list[Entry]) -> VariableStore:
    """Commit entries into a throwaway flat store, last declaration winning."""
    store = VariableStore.flat()
    for entry in entries:
        if entry.value is None:
            store.delete(entry.name)
        else:
            store.write(entry.name, entry.value)
    return store


def _ciphertext(entry: Entry) -> str | None:
    """Return the payload of a sealed entry value, None for plaintext and the sentinel."""
    if entry.name == PUBLIC_KEY_NAME or entry.value is None or not is_encrypted_value(entry.value):
        return None
    return strip_marker(entry.value)


def replace_encrypted_entries(
    entries: Iterable[Entry], decrypted: Mapping[str, str]
) -> tuple[list[Entry], bool]:
    """Substitute plaintexts for ciphertext values in an entry sequence.

    The sentinel entry is never modified; entries are otherwise kept in order.

    Args:
        entries: Parsed entries
        decrypted: Mapping of ciphertext payload (marker removed) to plaintext

    Returns:
        Tuple of (new entries, True if any value is still encrypted)
    """
    result: list[Entry] = []
    still_encrypted = False
    for entry in entries:
        ciphertext = _ciphertext(entry)
        if ciphertext is not None:
            plaintext = decrypted.get(ciphertext)
            if plaintext is None:
                still_encrypted = True
            else:
                entry = Entry(entry.name, plaintext)
        result.append(entry)
    return result, still_encrypted


def decrypt_entries(entries: Iterable[Entry], decryptor: Decryptor) -> list[Entry]:
    """Resolve every sealed value in an entry sequence.

    Args:
        entries: Parsed entries, possibly holding ``encrypted:`` values
        decryptor: Callable mapping ciphertext payloads to plaintexts

    Returns:
        Entries with every ciphertext replaced; unchanged if nothing is encrypted

    Raises:
        MissingPublicKey: If ciphertexts exist but no public key sentinel does
        DecryptionFailed: If the decryptor leaves any ciphertext unresolved
    """
    entries = list(entries)
    store = _entry_store(entries)
    public_key = is_encrypted(store)
    if not isinstance(public_key, str):
        return entries

    ciphertexts = collect_encrypted_values(store)
    # Values overridden by a later declaration are still present in the sequence
    shadowed = {c for c in map(_ciphertext, entries) if c is not None} - ciphertexts
    if shadowed:
        logger.debug(f"{len(shadowed)} encrypted value(s) are overridden by later entries")
        ciphertexts |= shadowed

    logger.debug(f"Requesting decryption of {len(ciphertexts)} value(s)")
    decrypted = decryptor(public_key, ciphertexts)

    result, still_encrypted = replace_encrypted_entries(entries, decrypted)
    if still_encrypted:
        missing = sorted(e.name for e in result if _ciphertext(e) is not None)
        raise DecryptionFailed(f"No plaintext returned for: {', '.join(missing)}")
    return result


def key_pair_decryptor(provider: KeyProvider | KeyPair) -> Decryptor:
    """Build a decryptor that opens ciphertexts with a local key pair.

    The key pair is fetched from the provider on every call and dropped when
    the call returns.
    """

    def _decrypt(public_key: str, ciphertexts: set[str]) -> dict[str, str]:
        key_pair = provider if isinstance(provider, KeyPair) else provider.get_key_pair()
        if key_pair.public_key != public_key:
            logger.warning(
                f"{PUBLIC_KEY_NAME} does not match the configured key pair; "
                "values sealed for another key cannot be opened"
            )
        return {
            ciphertext: decrypt(ENCRYPTED_PREFIX + ciphertext, key_pair)
            for ciphertext in ciphertexts
        }

    return _decrypt
