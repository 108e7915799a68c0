"""
Error types for reading, building, and rendering PEG traces.
"""

from dataclasses import dataclass, field
from typing import Optional


class PegtraceError(Exception):
    """Base exception for all pegtrace errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class TraceSyntaxError(PegtraceError):
    """
    Raised when a line inside a trace block matches none of the known forms.

    Examples:
    - Unknown event wording
    - Missing or malformed location
    - Trailing garbage after a rule event
    """

    pass


class TraceStructureError(PegtraceError):
    """
    Raised when the event stream and the reconstructed tree disagree.

    Examples:
    - A completion event names a different rule than the open attempt
    - A completion event arrives with no attempt open
    - A stop marker arrives while attempts are still open
    """

    pass


class ConfigError(PegtraceError):
    """
    Raised when a pegtrace.toml file cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - Wrong value type for a known key
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including its position in the trace.

    Attributes:
        source: Name of the trace stream (file path or "<stdin>")
        line: Line number within the stream (1-indexed)
        column: Column number within the line (1-indexed)
        snippet: The offending line, verbatim
        expected: What would have been accepted at ``column``
    """

    source: str
    line: int
    column: int = 1
    snippet: str | None = None
    expected: list[str] = field(default_factory=list)

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "trace.log:10:5" followed by the
            offending line and a marker under the column.
        """
        location = f"{self.source}:{self.line}:{self.column}"
        if self.snippet is not None:
            location = f"{location}\n{self._format_snippet()}"
        if self.expected:
            location = f"{location}\nexpected one of: {', '.join(self.expected)}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending line with a line number and error marker."""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_syntax_error(
    message: str,
    source: str,
    line: int,
    column: int,
    snippet: str,
    expected: list[str] | None = None,
) -> TraceSyntaxError:
    """
    Helper to create a TraceSyntaxError with context.

    Args:
        message: Error description
        source: Stream name
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: The line that failed to parse
        expected: Alternatives that would have matched at ``column``

    Returns:
        TraceSyntaxError with context attached
    """
    context = ErrorContext(
        source=source,
        line=line,
        column=column,
        snippet=snippet,
        expected=sorted(expected or []),
    )
    return TraceSyntaxError(message, context)


def make_structure_error(
    message: str,
    source: str | None = None,
    line: int | None = None,
    snippet: str | None = None,
) -> TraceStructureError:
    """
    Helper to create a TraceStructureError with optional context.

    Args:
        message: Error description
        source: Optional stream name
        line: Optional line number of the event that exposed the problem
        snippet: Optional offending line

    Returns:
        TraceStructureError with context if a location was provided
    """
    if source and line:
        context = ErrorContext(source=source, line=line, snippet=snippet)
        return TraceStructureError(message, context)
    return TraceStructureError(message)
