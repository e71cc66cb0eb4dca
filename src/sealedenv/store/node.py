"""
Tree representation of resolved configuration values.

A `VariableNode` is either a `Leaf` holding a string or a `Branch` mapping
path segments to child nodes. Branches keep insertion order and own their
children; nodes are never shared between trees.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass
class Leaf:
    """A resolved string value."""

    value: str

    def copy(self) -> "Leaf":
        return Leaf(self.value)


@dataclass
class Branch:
    """An ordered mapping of path segment to child node."""

    children: dict[str, "VariableNode"] = field(default_factory=dict)

    def copy(self) -> "Branch":
        """Deep copy of this branch and everything below it."""
        return Branch({key: child.copy() for key, child in self.children.items()})

    def to_dict(self) -> dict[str, Any]:
        """Render the subtree as nested plain dicts and strings."""
        return {
            key: child.to_dict() if isinstance(child, Branch) else child.value
            for key, child in self.children.items()
        }

    def __len__(self) -> int:
        return len(self.children)


VariableNode = Union[Leaf, Branch]


def iter_leaves(
    node: VariableNode, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield ``(segments, value)`` for every leaf, depth-first in insertion order."""
    if isinstance(node, Leaf):
        yield prefix, node.value
        return
    for key, child in node.children.items():
        yield from iter_leaves(child, prefix + (key,))
