"""
Trace interpretation engine.

Turns a ``[PEG_TRACE]`` log into one call tree per trace session, with end
locations backfilled and partial matches marked.
"""

from . import ir
from .backfill import backfill_next_loc
from .classify import mark_partial_matches
from .errors import (
    ConfigError,
    PegtraceError,
    TraceStructureError,
    TraceSyntaxError,
)
from .filters import NO_FILTER, TraceFilter
from .grammar import parse_trace_line
from .parser import parse_trace_file, parse_trace_text, parse_traces

__all__ = [
    "ir",
    "backfill_next_loc",
    "mark_partial_matches",
    "ConfigError",
    "PegtraceError",
    "TraceStructureError",
    "TraceSyntaxError",
    "NO_FILTER",
    "TraceFilter",
    "parse_trace_line",
    "parse_trace_file",
    "parse_trace_text",
    "parse_traces",
]
