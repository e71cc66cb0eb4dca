"""
Path-addressed variable store.

`VariableStore` wraps a `Branch` tree and addresses values by names split on a
separator (``APP.DB.HOST`` → ``APP`` / ``DB`` / ``HOST``). A flat store treats
every name as a single segment, so its tree never grows beyond depth one; the
scanner and the pipeline handle both shapes through the same interface.

Example:
    ```python
    store = VariableStore(separator=".")
    store.write("APP.DB.HOST", "localhost")
    store.read("APP.DB.HOST")         # "localhost"
    store.materialize().to_dict()     # {"APP": {"DB": {"HOST": "localhost"}}}
    ```

Stores are not thread-safe; use one store per load operation.
"""

from collections.abc import Iterable, Sequence

from ..exceptions import InvalidVariableName
from .node import Branch, Leaf, iter_leaves


class VariableStore:
    """Mutable container of a `VariableNode` tree with separator-based paths."""

    DEFAULT_SEPARATOR = "."

    def __init__(self, separator: str = DEFAULT_SEPARATOR, hierarchical: bool = True):
        """
        Initialize an empty store.

        Args:
            separator: Non-empty string separating path segments
            hierarchical: If False, names are never split (flat store)

        Raises:
            ValueError: If the separator is empty
        """
        if not separator:
            raise ValueError("Separator must be a non-empty string")
        self._separator = separator
        self._hierarchical = hierarchical
        self._root = Branch()

    @classmethod
    def flat(cls) -> "VariableStore":
        """Create a store that keeps every name as a single top-level key."""
        return cls(hierarchical=False)

    @property
    def separator(self) -> str:
        return self._separator

    @separator.setter
    def separator(self, value: str) -> None:
        if not value:
            raise ValueError("Separator must be a non-empty string")
        self._separator = value

    @property
    def hierarchical(self) -> bool:
        return self._hierarchical

    def split(self, path: str) -> list[str]:
        """Split a name into its path segments."""
        if not self._hierarchical:
            return [path]
        return path.split(self._separator)

    def path_segments(self, name_parts: Iterable[str]) -> str:
        """Join path segments into a name, the inverse of `split`.

        Raises:
            InvalidVariableName: If no segment is given, or in a hierarchical
                store a segment is empty or contains the separator
        """
        parts = list(name_parts)
        if not parts:
            raise InvalidVariableName("At least one path segment is required")
        if self._hierarchical:
            for part in parts:
                if not part or self._separator in part:
                    raise InvalidVariableName(
                        f"Path segment {part!r} cannot be joined with separator "
                        f"{self._separator!r}"
                    )
        return self._separator.join(parts)

    def _checked_segments(self, path: str) -> list[str]:
        segments = self.split(path)
        if any(not segment for segment in segments):
            raise InvalidVariableName(
                f"Variable name {path!r} has an empty segment for separator {self._separator!r}"
            )
        return segments

    def read(self, path: str) -> str | None:
        """Return the leaf value at `path`, or None if the path does not end on a leaf."""
        node: Branch | Leaf = self._root
        for segment in self.split(path):
            if not isinstance(node, Branch) or segment not in node.children:
                return None
            node = node.children[segment]
        return node.value if isinstance(node, Leaf) else None

    def write(self, path: str, value: str) -> bool:
        """Set the leaf at `path`, creating or replacing intermediate branches.

        An intermediate segment holding a leaf is replaced by an empty branch; a
        branch at the final segment is replaced by the leaf. The name is checked
        before anything is modified.

        Raises:
            InvalidVariableName: If the name has an empty segment
        """
        return self.write_segments(self._checked_segments(path), value)

    def write_segments(self, segments: Sequence[str], value: str) -> bool:
        """Set the leaf addressed by already split path segments.

        Segments are used as-is, so a segment may contain the current separator
        (e.g. after the separator was changed on a populated store).

        Raises:
            InvalidVariableName: If no segment is given
        """
        if not segments:
            raise InvalidVariableName("At least one path segment is required")
        node = self._root
        for segment in segments[:-1]:
            child = node.children.get(segment)
            if not isinstance(child, Branch):
                child = Branch()
                node.children[segment] = child
            node = child
        node.children[segments[-1]] = Leaf(value)
        return True

    def delete(self, path: str) -> bool:
        """Remove the node at `path`; deleting an absent path is a no-op."""
        segments = self.split(path)
        node = self._root
        for segment in segments[:-1]:
            child = node.children.get(segment)
            if not isinstance(child, Branch):
                return True
            node = child
        node.children.pop(segments[-1], None)
        return True

    def materialize(self) -> Branch:
        """Return a deep copy of the whole tree."""
        return self._root.copy()

    def restore(self, snapshot: Branch) -> None:
        """Replace the whole tree with a copy of a `materialize` snapshot."""
        self._root = snapshot.copy()

    def leaves(self) -> list[tuple[tuple[str, ...], str]]:
        """Snapshot of ``(segments, value)`` for every leaf, in scan order."""
        return list(iter_leaves(self._root))

    def flatten(self) -> dict[str, str]:
        """Map every full path name to its leaf value."""
        return {self._separator.join(segments): value for segments, value in self.leaves()}

    def to_dict(self) -> dict:
        """Nested plain-dict rendering of the tree."""
        return self._root.to_dict()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.read(path) is not None

    def __len__(self) -> int:
        return len(self.leaves())

    def __repr__(self) -> str:
        # Values may be secrets; only the shape is shown
        return (
            f"VariableStore(separator={self._separator!r}, "
            f"hierarchical={self._hierarchical}, leaves={len(self)})"
        )
