"""Hierarchical and flat variable stores."""

from .node import Branch, Leaf, VariableNode, iter_leaves
from .store import VariableStore

__all__ = ["Branch", "Leaf", "VariableNode", "VariableStore", "iter_leaves"]
