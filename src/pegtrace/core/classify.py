"""
Partial-match classification.

A node is a partial match when it succeeded while consuming input, or
when any of its descendants is a partial match. Zero-length successes do
not count on their own but do not stop propagation from below.
"""

from __future__ import annotations

from .ir import Node, NodeState


def is_progress(node: Node) -> bool:
    """True when ``node`` itself is a successful, non-empty match."""
    return node.state is NodeState.SUCCESS and not node.rule.is_zero_length()


def mark_partial_matches(root: Node) -> int:
    """
    Set ``partial_match`` on every node of the tree rooted at ``root``.

    Returns:
        Number of nodes marked as partial matches
    """
    # Pre-order list reversed gives children before their parents.
    order = list(root.walk())
    marked = 0
    for node in reversed(order):
        node.partial_match = is_progress(node) or any(
            child.partial_match for child in node.children
        )
        if node.partial_match:
            marked += 1
    return marked
