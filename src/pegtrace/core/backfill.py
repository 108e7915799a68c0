"""
Backfill of unreported end locations.

Most attempt and failure events carry only a start location. A rule's
match is taken to end exactly where the next thing in source order
begins: its next sibling's start, or, for a last child, whatever comes
after its parent.
"""

from __future__ import annotations

import logging

from .ir import Location, Node, Rule

logger = logging.getLogger(__name__)


def backfill_next_loc(node: Node, boundary: Location | None = None) -> int:
    """
    Fill in ``next_loc`` for every node below ``node`` that lacks one.

    Locations already present are never overwritten, so running the pass
    again changes nothing. A last child with no boundary above it keeps
    ``next_loc`` unset.

    Args:
        node: Root of the subtree to fill (usually a session root)
        boundary: Location of whatever follows ``node`` in source order

    Returns:
        Number of end locations filled in
    """
    filled = 0
    pending: list[tuple[Node, Location | None]] = [(node, boundary)]
    while pending:
        parent, after = pending.pop()
        children = parent.children
        for i, child in enumerate(children):
            if i + 1 < len(children):
                following: Location | None = children[i + 1].rule.loc
            else:
                following = after
            if following is not None and child.rule.next_loc is None:
                child.rule.next_loc = following
                child.rule.next_loc_inferred = True
                filled += 1
                _log_range(child.rule, "backfilled")
            else:
                _log_range(child.rule, "inferred" if child.rule.next_loc_inferred else "parsed")
            if child.children:
                pending.append((child, following))
    return filled


def _log_range(rule: Rule, how: str) -> None:
    if rule.next_loc is None or rule.is_zero_length():
        return
    logger.debug(f"{rule.name!r} {how}: {rule.loc}-{rule.next_loc}")
