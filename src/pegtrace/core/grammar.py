"""
Line grammar for ``[PEG_TRACE]`` event records.

Recognized forms, tried in order (first match wins)::

    Attempting to match rule <name> at <loc>[ to <loc>][ (pos <int>)]
    Failed to match rule <name> at <loc>[ to <loc>][ (pos <int>)]
    Matched rule <name> at <loc>[ to <loc>][ (pos <int>)]
    Cached match|fail of rule ...
    Entering level ...
    Leaving level ...

``<name>`` is an identifier, optionally wrapped in back-quotes. ``<loc>`` is
either ``line:column`` or a bare token index; the variant is chosen by the
presence of the colon.

Each recognizer scans the line with its own cursor and either consumes the
whole line or fails. When every recognizer fails, the diagnostic points at
the furthest column any of them reached and lists what was expected there.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn

from pydantic import ValidationError

from .errors import make_syntax_error
from .events import TraceEvent, TraceEventKind
from .ir import CharLocation, Location, Rule, TokenIndex

TRACE_MARKER = "[PEG_TRACE] "

_IDENTIFIER_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_")


class _NoMatch(Exception):
    """The current alternative does not match."""


class _Cursor:
    """Scanning position over one line, recording the furthest failure."""

    def __init__(self, text: str, start: int = 0):
        self.text = text
        self.pos = start
        self.failed_at = start
        self.expected: set[str] = set()

    def current_char(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def note(self, what: str) -> None:
        """Record that ``what`` would have been accepted at the current position."""
        if self.pos > self.failed_at:
            self.failed_at = self.pos
            self.expected = {what}
        elif self.pos == self.failed_at:
            self.expected.add(what)

    def fail(self, what: str) -> NoReturn:
        self.note(what)
        raise _NoMatch(what)

    def accept(self, literal: str) -> bool:
        """Consume ``literal`` if it comes next."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        self.note(repr(literal))
        return False

    def expect(self, literal: str) -> None:
        if not self.accept(literal):
            raise _NoMatch(literal)

    def read_int(self) -> int:
        start = self.pos
        while (ch := self.current_char()) is not None and ch.isascii() and ch.isdigit():
            self.pos += 1
        if self.pos == start:
            self.fail("integer")
        return int(self.text[start : self.pos])

    def read_identifier(self) -> str:
        start = self.pos
        while (ch := self.current_char()) is not None and ch in _IDENTIFIER_CHARS:
            self.pos += 1
        return self.text[start : self.pos]

    def skip_rest(self) -> None:
        self.pos = len(self.text)

    def expect_end(self) -> None:
        if self.pos != len(self.text):
            self.fail("end of line")


def _location(cursor: _Cursor) -> Location:
    first = cursor.read_int()
    try:
        if cursor.accept(":"):
            column = cursor.read_int()
            return CharLocation(line=first, column=column)
        return TokenIndex(index=first)
    except ValidationError:
        cursor.fail("1-based line:column")


def _rule_name(cursor: _Cursor) -> str:
    if cursor.accept("`"):
        name = cursor.read_identifier()
        cursor.expect("`")
        return name
    return cursor.read_identifier()


def _rule(cursor: _Cursor) -> Rule:
    """``<name> at <loc>[ to <loc>][ (pos <int>)]`` up to end of line."""
    name = _rule_name(cursor)
    cursor.expect(" at ")
    loc = _location(cursor)
    next_loc = None
    if cursor.accept(" to "):
        next_loc = _location(cursor)
    if cursor.accept(" (pos "):
        cursor.read_int()
        cursor.expect(")")
    cursor.expect_end()
    return Rule(name=name, loc=loc, next_loc=next_loc)


def _attempt(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Attempting to match rule ")
    return TraceEvent(TraceEventKind.ATTEMPT, _rule(cursor))


def _failure(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Failed to match rule ")
    return TraceEvent(TraceEventKind.FAILURE, _rule(cursor))


def _success(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Matched rule ")
    return TraceEvent(TraceEventKind.SUCCESS, _rule(cursor))


def _cache(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Cached ")
    if not (cursor.accept("match") or cursor.accept("fail")):
        raise _NoMatch("match|fail")
    cursor.expect(" of rule ")
    cursor.skip_rest()
    return TraceEvent(TraceEventKind.CACHE)


def _enter_level(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Entering level ")
    cursor.skip_rest()
    return TraceEvent(TraceEventKind.ENTER_LEVEL)


def _leave_level(cursor: _Cursor) -> TraceEvent:
    cursor.expect("Leaving level ")
    cursor.skip_rest()
    return TraceEvent(TraceEventKind.LEAVE_LEVEL)


RECOGNIZERS: tuple[Callable[[_Cursor], TraceEvent], ...] = (
    _attempt,
    _failure,
    _success,
    _cache,
    _enter_level,
    _leave_level,
)


def is_trace_line(line: str) -> bool:
    """True when ``line`` carries the trace event marker."""
    return line.startswith(TRACE_MARKER)


def parse_trace_line(line: str, *, source: str = "<input>", line_number: int = 1) -> TraceEvent:
    """
    Classify one trace line.

    Args:
        line: The line, without its trailing newline
        source: Stream name used in diagnostics
        line_number: Position of the line in the stream, for diagnostics

    Returns:
        The recognized event

    Raises:
        TraceSyntaxError: If the line matches none of the known forms
    """
    if not is_trace_line(line):
        column = _common_prefix_length(line, TRACE_MARKER) + 1
        raise make_syntax_error(
            "Line is not a trace event",
            source,
            line_number,
            column,
            line,
            [repr(TRACE_MARKER)],
        )

    failed_at = len(TRACE_MARKER)
    expected: set[str] = set()
    for recognizer in RECOGNIZERS:
        cursor = _Cursor(line, len(TRACE_MARKER))
        try:
            return recognizer(cursor)
        except _NoMatch:
            pass
        if cursor.failed_at > failed_at:
            failed_at = cursor.failed_at
            expected = set(cursor.expected)
        elif cursor.failed_at == failed_at:
            expected |= cursor.expected

    raise make_syntax_error(
        "Unrecognized trace event",
        source,
        line_number,
        failed_at + 1,
        line,
        list(expected),
    )


def _common_prefix_length(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length
