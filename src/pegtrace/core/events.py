"""
Typed events recognized on trace lines.

Each ``[PEG_TRACE]`` line is classified into exactly one event. Only
attempt, success, and failure events carry a rule and shape the tree;
cache and level markers are recognized and then ignored.
"""

from dataclasses import dataclass
from enum import Enum

from .ir import Rule


class TraceEventKind(Enum):
    """Kinds of trace events."""

    ATTEMPT = "attempt"
    SUCCESS = "success"
    FAILURE = "failure"
    CACHE = "cache"
    ENTER_LEVEL = "enter_level"
    LEAVE_LEVEL = "leave_level"

    @property
    def shapes_tree(self) -> bool:
        return self in (TraceEventKind.ATTEMPT, TraceEventKind.SUCCESS, TraceEventKind.FAILURE)


@dataclass
class TraceEvent:
    """
    A single classified trace line.

    Attributes:
        kind: Type of event
        rule: Rule named by the event (attempt/success/failure only)
    """

    kind: TraceEventKind
    rule: Rule | None = None

    def __repr__(self) -> str:
        if self.rule is None:
            return f"TraceEvent({self.kind.value})"
        end = f" to {self.rule.next_loc}" if self.rule.next_loc is not None else ""
        return f"TraceEvent({self.kind.value}, {self.rule.name!r}, {self.rule.loc}{end})"
