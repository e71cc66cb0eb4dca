"""
Key providers.

A key provider hands the built-in decryptor the key pair used to open sealed
values. Providers are looked up lazily, at decryption time, so a provider
backed by the process environment sees variables exported after it was
created.

```python
from sealedenv.providers import EnvKeyProvider

provider = EnvKeyProvider()          # DOTENV_PUBLIC_KEY / DOTENV_PRIVATE_KEY
key_pair = provider.get_key_pair()
```

Custom providers subclass `KeyProvider`:

```python
class KeyringProvider(KeyProvider):
    @property
    def name(self) -> str:
        return "keyring"

    def get_key_pair(self) -> KeyPair:
        return KeyPair(
            public_key=keyring.get_password("app", "public"),
            private_key=keyring.get_password("app", "private"),
        )
```
"""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping

from pydantic import SecretStr

from .exceptions import InvalidKey
from .models import KeyPair

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_KEY_ENV = "DOTENV_PUBLIC_KEY"
DEFAULT_PRIVATE_KEY_ENV = "DOTENV_PRIVATE_KEY"


class KeyProvider(ABC):
    """Abstract source of a sealed-box key pair."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in log messages."""

    @abstractmethod
    def get_key_pair(self) -> KeyPair:
        """Return the key pair.

        Raises:
            InvalidKey: If the key material is not available
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class StaticKeyProvider(KeyProvider):
    """Provider holding a key pair given at construction time."""

    def __init__(self, public_key: str, private_key: str | SecretStr):
        if not public_key:
            raise InvalidKey("The public key is empty")
        self._key_pair = KeyPair(public_key=public_key, private_key=private_key)

    @property
    def name(self) -> str:
        return "static"

    def get_key_pair(self) -> KeyPair:
        return self._key_pair


class EnvKeyProvider(KeyProvider):
    """Provider reading both keys from environment variables."""

    def __init__(
        self,
        public_key_env: str = DEFAULT_PUBLIC_KEY_ENV,
        private_key_env: str = DEFAULT_PRIVATE_KEY_ENV,
        environ: Mapping[str, str] | None = None,
    ):
        self.public_key_env = public_key_env
        self.private_key_env = private_key_env
        self._environ = environ

    @property
    def name(self) -> str:
        return "env"

    def get_key_pair(self) -> KeyPair:
        environ = os.environ if self._environ is None else self._environ
        public_key = environ.get(self.public_key_env)
        if not public_key:
            raise InvalidKey(f"Environment variable not found: {self.public_key_env}")
        private_key = environ.get(self.private_key_env)
        if not private_key:
            raise InvalidKey(f"Environment variable not found: {self.private_key_env}")
        logger.debug(f"Loaded key pair from {self.public_key_env}/{self.private_key_env}")
        return KeyPair(public_key=public_key, private_key=private_key)
