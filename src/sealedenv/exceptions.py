"""Exception hierarchy for sealedenv.

Cryptographic errors (`MissingPublicKey`, `DecryptionFailed`,
`CryptoUnavailable`, `InvalidKey`) come from the codec, the scanner and the
decryption pipeline. `InvalidPath`, `InvalidEncoding` and `InvalidFile` come from
reading and parsing configuration sources; `ValidationError` from post-load
assertions.
"""


class SealedEnvError(Exception):
    """Base class for every error raised by sealedenv."""


class MissingPublicKey(SealedEnvError):
    """Encrypted values were found but no DOTENV_PUBLIC_KEY sentinel names the key."""


class DecryptionFailed(SealedEnvError):
    """A marked value could not be opened (wrong key, corrupted or truncated data)."""


class CryptoUnavailable(SealedEnvError):
    """The sealed-box primitive could not be loaded on this platform."""


class InvalidKey(SealedEnvError, ValueError):
    """Key material is missing, not valid base64, or has the wrong size."""


class InvalidVariableName(SealedEnvError, ValueError):
    """A variable path cannot be represented with the store's separator."""


class InvalidPath(SealedEnvError):
    """No configuration source could be read from the given paths."""


class InvalidEncoding(SealedEnvError, ValueError):
    """The requested file encoding is unknown or the content does not decode."""


class InvalidFile(SealedEnvError, ValueError):
    """The configuration text could not be parsed into entries."""


class ValidationError(SealedEnvError):
    """One or more loaded variables failed their assertions."""
