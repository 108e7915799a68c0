"""
Call-tree IR types for pegtrace.

A trace session is a synthetic root node owning one child per top-level
rule attempt, each of which owns the attempts nested inside it.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, Field

from .location import START_OF_INPUT, Location


class NodeState(StrEnum):
    """Outcome of a rule attempt."""

    SUCCESS = "success"
    FAILURE = "failure"
    UNKNOWN = "unknown"


class Rule(BaseModel):
    """
    A grammar rule invocation and the span it covers.

    Attributes:
        name: Rule identifier, with any back-quotes removed
        loc: Where the attempt started
        next_loc: Where the match ended, when known
        next_loc_inferred: True when ``next_loc`` was filled in by the
            backfill pass rather than read from the trace
    """

    name: str
    loc: Location
    next_loc: Location | None = None
    next_loc_inferred: bool = False

    def is_zero_length(self) -> bool:
        """True when the rule consumed nothing (or its end is unknown)."""
        if self.next_loc is not None and self.next_loc > self.loc:
            return False
        return True


class Node(BaseModel):
    """
    One rule attempt in the call tree.

    Children are kept in the order their attempts were opened, failed
    attempts included.

    Attributes:
        rule: The attempted rule
        state: Success or failure once the attempt completed
        children: Attempts nested inside this one
        partial_match: Whether this node or a descendant made progress
    """

    rule: Rule
    state: NodeState = NodeState.UNKNOWN
    children: list[Node] = Field(default_factory=list)
    partial_match: bool = False

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return sum(1 for _ in self.walk())


class TraceSession(BaseModel):
    """
    One ``[PEG_INPUT_START]`` ... ``[PEG_TRACE_STOP]`` block.

    Attributes:
        number: 1-based position of the session in the stream
        root: Synthetic root node owning the top-level attempts
        text: Source text the parser was run against, verbatim
    """

    number: int
    root: Node
    text: str = ""


def make_root(number: int) -> Node:
    """Create the synthetic root node for session ``number``."""
    return Node(
        rule=Rule(name=f"Trace #{number}", loc=START_OF_INPUT),
        state=NodeState.SUCCESS,
    )
