"""Sealed-box encryption primitives for configuration values."""

from .codec import (
    ENCRYPTED_PREFIX,
    KEY_SIZE,
    base64_decode,
    base64_encode,
    decrypt,
    encrypt,
    generate_key_pair,
    is_encrypted_value,
    strip_marker,
)

__all__ = [
    "ENCRYPTED_PREFIX",
    "KEY_SIZE",
    "base64_decode",
    "base64_encode",
    "decrypt",
    "encrypt",
    "generate_key_pair",
    "is_encrypted_value",
    "strip_marker",
]
