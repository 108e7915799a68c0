"""
pegtrace - interactive call trees for PEG parser traces.

Reads the ``[PEG_TRACE]`` output of a tracing PEG parser and renders the
rule attempts as nested, collapsible HTML.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, PegtraceError, TraceStructureError, TraceSyntaxError
from .core.parser import parse_trace_file, parse_trace_text, parse_traces

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "PegtraceError",
    "TraceSyntaxError",
    "TraceStructureError",
    "ConfigError",
    "parse_traces",
    "parse_trace_text",
    "parse_trace_file",
]
