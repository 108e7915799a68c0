"""
Read-only flatten/hide filtering over a finished call tree.

``flatten`` collapses single-child wrapper rules into their child;
``hide`` drops a rule and its whole subtree. Neither touches the tree, so
one tree can be viewed under any number of filters.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .ir import Node


@dataclass(frozen=True)
class TraceFilter:
    """
    Rule-name filters applied while walking a tree.

    Attributes:
        flatten: Rules replaced by their only child when they have exactly one
        hide: Rules skipped along with their subtrees
    """

    flatten: frozenset[str] = field(default_factory=frozenset)
    hide: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_names(
        cls,
        flatten: Iterable[str] | None = None,
        hide: Iterable[str] | None = None,
    ) -> TraceFilter:
        return cls(flatten=frozenset(flatten or ()), hide=frozenset(hide or ()))

    def should_flatten(self, node: Node) -> bool:
        return node.rule.name in self.flatten and len(node.children) == 1

    def should_hide(self, node: Node) -> bool:
        return node.rule.name in self.hide

    def resolve(self, node: Node) -> Node:
        """Follow a chain of flattened wrappers down to the node to display."""
        while self.should_flatten(node):
            node = node.children[0]
        return node

    def visible_children(self, node: Node) -> list[Node]:
        """Children of ``node`` to display, with hidden ones skipped and wrappers resolved."""
        return [self.resolve(child) for child in node.children if not self.should_hide(child)]


NO_FILTER = TraceFilter()
