"""
Dotenv loader facade.

`Dotenvx` ties a source, the entry parser, its middlewares and a repository
together:

```python
from sealedenv import Dotenvx
from sealedenv.providers import EnvKeyProvider

dotenv = Dotenvx.create_immutable(["."], names=[".env", ".env.local"])
dotenv.load_with_key(EnvKeyProvider())
dotenv.required(["DB_HOST", "DB_PASSWORD"]).not_empty()
```

A load reads the source, parses it (interpolating against the repository),
runs every middleware in registration order and commits the result.
Middleware errors propagate; nothing is committed when one fails.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .config.models import SealedEnvConfigModel
from .exceptions import InvalidPath
from .loading import (
    EnvironmentSink,
    FileSource,
    OsEnvironmentSink,
    Repository,
    Source,
    StoreSink,
    StringSource,
    commit_entries,
    parse_entries,
)
from .models import KeyPair
from .pipeline import Decryptor, DecryptorMiddleware, Middleware, key_pair_decryptor
from .providers import EnvKeyProvider, KeyProvider
from .store import VariableStore
from .validator import Validator

logger = logging.getLogger(__name__)

PathsArg = str | Path | Iterable[str | Path]
NamesArg = str | Iterable[str] | None


def _as_list(value: PathsArg) -> list[str | Path]:
    if isinstance(value, (str, Path)):
        return [value]
    return list(value)


def _names_list(names: NamesArg) -> list[str] | None:
    if names is None:
        return None
    if isinstance(names, str):
        return [names]
    return list(names)


class Dotenvx:
    """Loads dotenv configuration into a repository."""

    def __init__(
        self,
        source: Source,
        repository: Repository,
        middlewares: Iterable[Middleware] | None = None,
    ):
        self.source = source
        self.repository = repository
        self.middlewares: list[Middleware] = list(middlewares or [])

    @classmethod
    def create(
        cls,
        repository: Repository,
        paths: PathsArg,
        names: NamesArg = None,
        short_circuit: bool = True,
        encoding: str | None = None,
    ) -> "Dotenvx":
        """Create a loader reading files from `paths` into `repository`.

        Args:
            repository: Destination of loaded variables
            paths: Directory or directories to search
            names: File name(s) to look for in each directory (default ``.env``)
            short_circuit: Stop at the first readable file
            encoding: File encoding (default UTF-8)
        """
        source = FileSource(
            _as_list(paths),
            names=_names_list(names),
            short_circuit=short_circuit,
            encoding=encoding,
        )
        return cls(source, repository)

    @classmethod
    def create_mutable(
        cls,
        paths: PathsArg,
        names: NamesArg = None,
        short_circuit: bool = True,
        encoding: str | None = None,
    ) -> "Dotenvx":
        """Loader writing to ``os.environ``, overwriting existing variables."""
        repository = Repository([OsEnvironmentSink()])
        return cls.create(repository, paths, names, short_circuit, encoding)

    @classmethod
    def create_immutable(
        cls,
        paths: PathsArg,
        names: NamesArg = None,
        short_circuit: bool = True,
        encoding: str | None = None,
    ) -> "Dotenvx":
        """Loader writing to ``os.environ`` without touching variables already set."""
        repository = Repository([OsEnvironmentSink()], immutable=True)
        return cls.create(repository, paths, names, short_circuit, encoding)

    @classmethod
    def create_array_backed(
        cls,
        paths: PathsArg,
        names: NamesArg = None,
        short_circuit: bool = True,
        encoding: str | None = None,
    ) -> "Dotenvx":
        """Loader writing to a private flat store; the environment is left alone."""
        repository = Repository([StoreSink(VariableStore.flat())])
        return cls.create(repository, paths, names, short_circuit, encoding)

    @classmethod
    def create_hierarchical(
        cls,
        paths: PathsArg,
        names: NamesArg = None,
        short_circuit: bool = True,
        encoding: str | None = None,
        separator: str = VariableStore.DEFAULT_SEPARATOR,
    ) -> "Dotenvx":
        """Loader writing to a private hierarchical store.

        ``DB.HOST=localhost`` is stored as ``{"DB": {"HOST": "localhost"}}``;
        see `store`.
        """
        repository = Repository([StoreSink(VariableStore(separator=separator))])
        return cls.create(repository, paths, names, short_circuit, encoding)

    @classmethod
    def from_config(cls, config: SealedEnvConfigModel) -> "Dotenvx":
        """Build a loader from a configuration model.

        Variables always land in a private store (hierarchical or flat) and are
        mirrored into ``os.environ`` when `mirror_environment` is set. With
        `decrypt` enabled a decryptor middleware using the configured key
        environment variables is registered.
        """
        store = (
            VariableStore(separator=config.separator)
            if config.hierarchical
            else VariableStore.flat()
        )
        sinks: list[EnvironmentSink] = [StoreSink(store)]
        if config.mirror_environment:
            sinks.append(OsEnvironmentSink())
        repository = Repository(sinks, immutable=config.immutable)

        dotenv = cls.create(
            repository,
            config.paths,
            names=config.names,
            short_circuit=config.short_circuit,
            encoding=config.encoding,
        )
        if config.decrypt:
            provider = EnvKeyProvider(
                public_key_env=config.keys.public_key_env,
                private_key_env=config.keys.private_key_env,
            )
            dotenv.add_middleware(
                DecryptorMiddleware(
                    key_pair_decryptor(provider),
                    ignore_errors=config.ignore_decryption_errors,
                )
            )
        return dotenv

    @classmethod
    def parse(cls, content: str) -> dict[str, str | None]:
        """Parse and interpolate `content` without touching the environment.

        Raises:
            InvalidFile: If the content cannot be parsed
        """
        dotenv = cls(StringSource(content), Repository([StoreSink(VariableStore.flat())]))
        return dotenv.load()

    @property
    def store(self) -> VariableStore | None:
        """The store of the first store-backed sink, if any."""
        for sink in self.repository.sinks:
            if isinstance(sink, StoreSink):
                return sink.store
        return None

    def add_middleware(self, middleware: Middleware) -> "Dotenvx":
        self.middlewares.append(middleware)
        return self

    def load(self) -> dict[str, str | None]:
        """Read, parse, process and commit the configuration.

        Returns:
            The variables written (None for cleared ones)

        Raises:
            InvalidPath: If no file could be read
            InvalidEncoding: If a file cannot be decoded
            InvalidFile: If the content cannot be parsed
        """
        return self._load(self.middlewares)

    def safe_load(self) -> dict[str, str | None]:
        """Like `load`, returning an empty mapping when no file can be read."""
        try:
            return self.load()
        except InvalidPath as e:
            logger.debug(f"Nothing loaded: {e}")
            return {}

    def load_encrypted(self, decryptor: Decryptor) -> dict[str, str | None]:
        """Load after running the registered middlewares and then `decryptor`.

        Raises:
            MissingPublicKey: If sealed values exist but ``DOTENV_PUBLIC_KEY`` does not
            DecryptionFailed: If any sealed value stays unresolved
        """
        return self._load([*self.middlewares, DecryptorMiddleware(decryptor)])

    def safe_load_encrypted(self, decryptor: Decryptor) -> dict[str, str | None]:
        try:
            return self.load_encrypted(decryptor)
        except InvalidPath as e:
            logger.debug(f"Nothing loaded: {e}")
            return {}

    def load_with_key(self, provider: KeyProvider | KeyPair) -> dict[str, str | None]:
        """Load, opening sealed values with a local key pair."""
        return self.load_encrypted(key_pair_decryptor(provider))

    def required(self, variables: str | Iterable[str]) -> Validator:
        """Assert that `variables` are defined and return a validator for more checks."""
        return self._validator(variables, nullable=False).required()

    def if_present(self, variables: str | Iterable[str]) -> Validator:
        """Validator whose assertions skip undefined variables."""
        return self._validator(variables, nullable=True)

    def _validator(self, variables: str | Iterable[str], nullable: bool) -> Validator:
        names = [variables] if isinstance(variables, str) else list(variables)
        return Validator(self.repository, names, nullable=nullable)

    def _load(self, middlewares: list[Middleware]) -> dict[str, str | None]:
        entries = parse_entries(self.source.read(), self.repository.get)
        for middleware in middlewares:
            entries = middleware.process(entries)
        return commit_entries(self.repository, entries)
