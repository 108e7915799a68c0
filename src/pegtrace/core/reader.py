"""
Framing of a trace stream into sessions.

A stream holds any number of blocks of the form::

    [PEG_INPUT_START]
    <source text, verbatim>
    [PEG_TRACE_START]
    [PEG_TRACE] <event>
    ...
    [PEG_TRACE_STOP]

Lines outside a block are ignored, so trace output can be interleaved
with whatever else the traced program prints.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from .builder import TreeBuilder
from .grammar import parse_trace_line
from .ir import TraceSession

logger = logging.getLogger(__name__)

INPUT_START = "[PEG_INPUT_START]"
TRACE_START = "[PEG_TRACE_START]"
TRACE_STOP = "[PEG_TRACE_STOP]"


class ReaderState(Enum):
    """Where the reader is within the current block."""

    WAITING_FOR_INPUT_START = "waiting_for_input_start"
    READING_INPUT = "reading_input"
    READING_TRACE = "reading_trace"


class TraceReader:
    """
    Consumes a trace stream line by line and collects finished sessions.

    Example:
        reader = TraceReader("trace.log")
        for line in stream:
            reader.feed(line)
        sessions = reader.finish()
    """

    def __init__(self, source: str = "<input>"):
        self.source = source
        self.state = ReaderState.WAITING_FOR_INPUT_START
        self.sessions: list[TraceSession] = []
        self.line_number = 0
        self._input: list[str] = []
        self._builder: TreeBuilder | None = None
        self._next_number = 1

    def feed(self, line: str) -> None:
        """
        Consume one line (a trailing newline is ignored).

        Raises:
            TraceSyntaxError: If a line inside a trace block is not an event
            TraceStructureError: If the events do not nest properly
        """
        self.line_number += 1
        line = line.rstrip("\r\n")

        if self.state is ReaderState.WAITING_FOR_INPUT_START:
            if line == INPUT_START:
                logger.info("input start")
                self.state = ReaderState.READING_INPUT
            return

        if self.state is ReaderState.READING_INPUT:
            if line == TRACE_START:
                logger.info(f"trace #{self._next_number} start")
                self._builder = TreeBuilder(self._next_number, self.source)
                self._next_number += 1
                self.state = ReaderState.READING_TRACE
                return
            self._input.append(line + "\n")
            return

        assert self._builder is not None
        if line == TRACE_STOP:
            root = self._builder.finish(self.line_number)
            session = TraceSession(
                number=self._builder.number,
                root=root,
                text="".join(self._input),
            )
            self.sessions.append(session)
            logger.info(f"trace #{session.number} stop ({root.count() - 1} attempts)")
            self._reset()
            return

        event = parse_trace_line(line, source=self.source, line_number=self.line_number)
        self._builder.apply(event, self.line_number)

    def feed_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.feed(line)

    def finish(self) -> list[TraceSession]:
        """Return all completed sessions, discarding one left open at end of stream."""
        if self.state is not ReaderState.WAITING_FOR_INPUT_START:
            logger.warning(
                f"{self.source}: stream ended in state {self.state.value}; "
                "discarding the incomplete trace"
            )
            self._reset()
        return self.sessions

    def _reset(self) -> None:
        self._input = []
        self._builder = None
        self.state = ReaderState.WAITING_FOR_INPUT_START
