"""
Middleware run between parsing and committing.

A middleware receives the full parsed entry list and returns the list to
commit. `Dotenvx` runs its middlewares in registration order.

```python
from sealedenv import Dotenvx
from sealedenv.pipeline import DecryptorMiddleware, key_pair_decryptor
from sealedenv.providers import EnvKeyProvider

dotenv = Dotenvx.create_mutable(".")
dotenv.add_middleware(DecryptorMiddleware(key_pair_decryptor(EnvKeyProvider())))
dotenv.load()
```
"""

import logging
from abc import ABC, abstractmethod

from .decrypt import decrypt_entries
from .entries import Decryptor, Entry

logger = logging.getLogger(__name__)


class Middleware(ABC):
    """Transforms the parsed entry sequence before it is committed."""

    @abstractmethod
    def process(self, entries: list[Entry]) -> list[Entry]:
        """Return the entries to commit."""


class DecryptorMiddleware(Middleware):
    """Replaces sealed values using a caller-supplied decryptor.

    By default any failure (missing public key, decryptor error, unresolved
    ciphertext) propagates. With ``ignore_errors=True`` the failure is logged and
    the entries are passed through unresolved.
    """

    def __init__(self, decryptor: Decryptor, ignore_errors: bool = False):
        self._decryptor = decryptor
        self.ignore_errors = ignore_errors

    def process(self, entries: list[Entry]) -> list[Entry]:
        try:
            return decrypt_entries(entries, self._decryptor)
        except Exception as e:
            if not self.ignore_errors:
                raise
            logger.warning(f"Decryption failed, entries passed through unresolved: {e}")
            return list(entries)
