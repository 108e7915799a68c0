"""
High-level entry points: trace stream in, finished sessions out.

Every returned session has been built, backfilled, and classified, so it
is ready for rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .backfill import backfill_next_loc
from .classify import mark_partial_matches
from .ir import TraceSession
from .reader import TraceReader

logger = logging.getLogger(__name__)


def parse_traces(lines: Iterable[str], source: str = "<input>") -> list[TraceSession]:
    """
    Read every trace session from a stream of lines.

    Args:
        lines: The stream, one line per item (trailing newlines allowed)
        source: Stream name used in diagnostics

    Returns:
        Finished sessions in stream order (possibly empty)

    Raises:
        TraceSyntaxError: On the first line that is not a valid trace event
        TraceStructureError: When attempts and completions do not nest
    """
    reader = TraceReader(source)
    reader.feed_lines(lines)
    sessions = reader.finish()

    for session in sessions:
        finalize_session(session)

    return sessions


def finalize_session(session: TraceSession) -> None:
    """Run the post-passes that rendering depends on, in order."""
    filled = backfill_next_loc(session.root)
    marked = mark_partial_matches(session.root)
    logger.debug(
        f"trace #{session.number}: backfilled {filled} end location(s), "
        f"{marked} partial match node(s)"
    )


def parse_trace_text(text: str, source: str = "<string>") -> list[TraceSession]:
    """Read every trace session from an in-memory string."""
    return parse_traces(text.splitlines(), source)


def parse_trace_file(path: Path) -> list[TraceSession]:
    """Read every trace session from a file."""
    with path.open(encoding="utf-8", errors="replace") as stream:
        return parse_traces(stream, str(path))
