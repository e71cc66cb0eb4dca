"""Entry and decryptor types shared by the parser, the pipeline and the loader."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Entry:
    """A parsed ``NAME=value`` pair.

    A value of None means the name was declared without a value and should be
    cleared from the repository on commit.
    """

    name: str
    value: str | None

    def __repr__(self) -> str:
        # Values may be secrets
        state = "unset" if self.value is None else f"{len(self.value)} chars"
        return f"Entry(name={self.name!r}, value=<{state}>)"


class Decryptor(Protocol):
    """Callable turning ciphertext payloads into plaintexts.

    Receives the public key named by the configuration source and the set of
    ciphertext payloads (``encrypted:`` marker removed). Returns a mapping of
    payload to plaintext. It may delegate to a remote key holder; it runs
    synchronously and any exception it raises reaches the caller.
    """

    def __call__(self, public_key: str, ciphertexts: set[str]) -> Mapping[str, str]: ...
