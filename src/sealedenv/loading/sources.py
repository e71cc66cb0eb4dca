"""
Configuration sources.

A source turns its inputs into one text blob for the entry parser.
`FileSource` searches every ``path / name`` combination in order; in
short-circuit mode it stops at the first readable file, otherwise it
concatenates every readable file so later files override earlier ones.
"""

import codecs
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ..exceptions import InvalidEncoding, InvalidPath

logger = logging.getLogger(__name__)


class Source(ABC):
    """Provides the raw configuration text."""

    @abstractmethod
    def read(self) -> str:
        """Return the configuration text.

        Raises:
            InvalidPath: If nothing could be read
        """


class StringSource(Source):
    """Source over an in-memory string."""

    def __init__(self, content: str):
        self.content = content

    def read(self) -> str:
        return self.content


class FileSource(Source):
    """Source reading dotenv files from a list of directories."""

    DEFAULT_NAME = ".env"

    def __init__(
        self,
        paths: Iterable[str | Path],
        names: Iterable[str] | None = None,
        short_circuit: bool = True,
        encoding: str | None = None,
    ):
        self.paths = [Path(p) for p in paths]
        self.names = list(names) if names is not None else [self.DEFAULT_NAME]
        self.short_circuit = short_circuit
        self.encoding = encoding

    def candidate_files(self) -> list[Path]:
        """Every ``path / name`` combination, in search order."""
        return [path / name for path in self.paths for name in self.names]

    def _codec(self) -> str:
        if self.encoding is None:
            return "utf-8-sig"
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise InvalidEncoding(f"Illegal character encoding [{self.encoding}] specified.") from e
        return self.encoding

    def read(self) -> str:
        if not self.paths:
            raise InvalidPath("At least one environment file path must be provided.")

        encoding = self._codec()
        contents: list[str] = []
        for file_path in self.candidate_files():
            if not file_path.is_file():
                continue
            try:
                raw = file_path.read_bytes()
            except OSError as e:
                logger.debug(f"Skipping unreadable file {file_path}: {e}")
                continue
            try:
                contents.append(raw.decode(encoding))
            except UnicodeDecodeError as e:
                raise InvalidEncoding(f"File {file_path} is not valid {encoding}") from e
            logger.debug(f"Read environment file {file_path}")
            if self.short_circuit:
                break

        if contents:
            return "\n".join(contents)
        raise InvalidPath(
            "Unable to read any of the environment file(s) at "
            f"[{', '.join(str(p) for p in self.candidate_files())}]."
        )
