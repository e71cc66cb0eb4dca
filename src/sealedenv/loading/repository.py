"""
Repositories and environment sinks.

The commit step writes every entry into a `Repository`, which fans the write
out to its sinks: the process environment, a `VariableStore`, or anything
implementing `EnvironmentSink`.
"""

import logging
import os
from collections.abc import Callable, Iterable
from typing import Protocol

from ..store import VariableStore

logger = logging.getLogger(__name__)


class EnvironmentSink(Protocol):
    """Destination for committed variables."""

    def read(self, name: str) -> str | None: ...

    def write(self, name: str, value: str) -> bool: ...

    def delete(self, name: str) -> bool: ...


class OsEnvironmentSink:
    """Mirrors variables into ``os.environ``."""

    def read(self, name: str) -> str | None:
        return os.environ.get(name)

    def write(self, name: str, value: str) -> bool:
        os.environ[name] = value
        return True

    def delete(self, name: str) -> bool:
        os.environ.pop(name, None)
        return True


class StoreSink:
    """Writes variables into a `VariableStore`, flat or hierarchical."""

    def __init__(self, store: VariableStore | None = None):
        self.store = store if store is not None else VariableStore.flat()

    def read(self, name: str) -> str | None:
        return self.store.read(name)

    def write(self, name: str, value: str) -> bool:
        return self.store.write(name, value)

    def delete(self, name: str) -> bool:
        return self.store.delete(name)


class Repository:
    """Set of sinks written together.

    An immutable repository never overwrites or clears a variable that was
    already defined in one of its sinks before it first wrote that name.
    """

    def __init__(self, sinks: Iterable[EnvironmentSink], immutable: bool = False):
        self.sinks = list(sinks)
        self.immutable = immutable
        self._loaded: set[str] = set()

    def get(self, name: str) -> str | None:
        """Value from the first sink defining `name`."""
        for sink in self.sinks:
            value = sink.read(name)
            if value is not None:
                return value
        return None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def _is_locked(self, name: str) -> bool:
        return self.immutable and name not in self._loaded and self.has(name)

    def set(self, name: str, value: str) -> bool:
        """Write `name` to every sink; all sinks or none are updated.

        Returns:
            False if an immutable repository refused the write
        """
        if self._is_locked(name):
            logger.debug(f"Not overwriting existing variable {name}")
            return False
        self._apply(name, lambda sink: sink.write(name, value))
        self._loaded.add(name)
        return True

    def clear(self, name: str) -> bool:
        """Remove `name` from every sink.

        Returns:
            False if an immutable repository refused the removal
        """
        if self._is_locked(name):
            logger.debug(f"Not clearing existing variable {name}")
            return False
        self._apply(name, lambda sink: sink.delete(name))
        self._loaded.add(name)
        return True

    def _apply(self, name: str, operation: Callable[[EnvironmentSink], bool]) -> None:
        rollbacks = [_rollback(sink, name) for sink in self.sinks]
        done = 0
        try:
            for sink in self.sinks:
                operation(sink)
                done += 1
        except Exception:
            # Undo the sinks already written and the one that failed
            for rollback in rollbacks[: done + 1]:
                rollback()
            raise


def _rollback(sink: EnvironmentSink, name: str) -> Callable[[], object]:
    """Capture what is needed to undo a write of `name` to `sink`."""
    if isinstance(sink, StoreSink):
        # A hierarchical write may replace a leaf with a branch; restore the whole tree
        store = sink.store
        snapshot = store.materialize()
        return lambda: store.restore(snapshot)
    previous = sink.read(name)
    if previous is None:
        return lambda: sink.delete(name)
    return lambda: sink.write(name, previous)
