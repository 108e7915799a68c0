"""
Stack machine that rebuilds the call tree of one trace session.

Attempts push an open node; completions pop it, record the outcome, and
append it to the enclosing node. Nothing is ever removed, so failed
attempts stay in the tree next to the alternatives that replaced them.
"""

from __future__ import annotations

import logging

from .errors import make_structure_error
from .events import TraceEvent, TraceEventKind
from .ir import Node, NodeState, make_root

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Rebuilds a call tree from the events of a single session.

    The stack always holds the session root at the bottom and the
    innermost open attempt on top.
    """

    def __init__(self, number: int, source: str = "<input>"):
        self.number = number
        self.source = source
        self.stack: list[Node] = [make_root(number)]

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def root(self) -> Node:
        return self.stack[0]

    def apply(self, event: TraceEvent, line_number: int | None = None) -> None:
        """
        Apply one event to the tree.

        Raises:
            TraceStructureError: If a completion does not match the open attempt
        """
        if not event.kind.shapes_tree:
            return
        if event.kind is TraceEventKind.ATTEMPT:
            assert event.rule is not None
            self.stack.append(Node(rule=event.rule))
            logger.debug(f"push {event.rule.name} at {event.rule.loc} (depth {self.depth})")
        elif event.kind is TraceEventKind.SUCCESS:
            self._complete(event, NodeState.SUCCESS, line_number)
        elif event.kind is TraceEventKind.FAILURE:
            self._complete(event, NodeState.FAILURE, line_number)

    def _complete(self, event: TraceEvent, state: NodeState, line_number: int | None) -> None:
        assert event.rule is not None
        if self.depth <= 1:
            raise make_structure_error(
                f"Rule {event.rule.name!r} finished but no attempt is open",
                self.source,
                line_number,
            )

        node = self.stack.pop()
        if node.rule.name != event.rule.name:
            raise make_structure_error(
                f"Expected rule {node.rule.name!r} to finish, but got {event.rule.name!r}",
                self.source,
                line_number,
            )

        node.state = state
        if event.rule.next_loc is not None:
            node.rule.next_loc = event.rule.next_loc
        self.stack[-1].children.append(node)
        logger.debug(f"pop {node.rule.name} as {state} (depth {self.depth})")

    def finish(self, line_number: int | None = None) -> Node:
        """
        Close the session and return its root.

        Raises:
            TraceStructureError: If any attempt is still open
        """
        if self.depth != 1:
            open_rules = ", ".join(node.rule.name for node in self.stack[1:])
            raise make_structure_error(
                f"Trace #{self.number} stopped with {self.depth - 1} unterminated "
                f"attempt(s): {open_rules}",
                self.source,
                line_number,
            )
        return self.stack.pop()
