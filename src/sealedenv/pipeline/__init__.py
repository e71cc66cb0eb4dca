"""Decryption pipeline for parsed configuration entries."""

from .decrypt import decrypt_entries, key_pair_decryptor, replace_encrypted_entries
from .entries import Decryptor, Entry
from .middleware import DecryptorMiddleware, Middleware

__all__ = [
    "Decryptor",
    "DecryptorMiddleware",
    "Entry",
    "Middleware",
    "decrypt_entries",
    "key_pair_decryptor",
    "replace_encrypted_entries",
]
