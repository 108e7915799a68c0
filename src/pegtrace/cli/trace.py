"""
Trace commands: render a trace to HTML, or inspect it in the terminal.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from pegtrace.core.errors import ConfigError, PegtraceError, TraceSyntaxError
from pegtrace.core.filters import TraceFilter
from pegtrace.core.ir import TraceSession
from pegtrace.core.manifest import PegtraceConfig, resolve_config
from pegtrace.core.parser import parse_trace_file, parse_traces
from pegtrace.render.console import print_sessions
from pegtrace.render.html import write_html

from .utils import configure_logging, print_error, print_info, print_success

NO_TRACE_MESSAGE = "no trace found, nothing to do"


def _load_config(config: Path | None) -> PegtraceConfig:
    try:
        return resolve_config(config)
    except ConfigError as e:
        print_error(f"Config error: {e}")
        raise typer.Exit(code=1)


def _read_sessions(input: Path | None) -> list[TraceSession]:
    """Read and finish every session, mapping trace errors to exit code 1."""
    try:
        if input is None:
            return parse_traces(sys.stdin, "<stdin>")
        return parse_trace_file(input)
    except TraceSyntaxError as e:
        print_error(f"Trace syntax error: {e}")
        raise typer.Exit(code=1)
    except PegtraceError as e:
        print_error(f"Trace error: {e}")
        raise typer.Exit(code=1)


def _make_filter(
    mf: PegtraceConfig, flatten: list[str] | None, hide: list[str] | None
) -> TraceFilter:
    return TraceFilter.from_names(
        flatten=[*mf.render.flatten, *(flatten or [])],
        hide=[*mf.render.hide, *(hide or [])],
    )


def render_command(
    input: Path | None = typer.Argument(
        None, exists=True, dir_okay=False, help="Trace file (default: stdin)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help='Output path, "./trace.html" for example'
    ),
    flatten: list[str] | None = typer.Option(
        None,
        "--flatten",
        "-f",
        help="Rule to flatten: if it has a single child, only the child is shown",
    ),
    hide: list[str] | None = typer.Option(None, "--hide", "-h", help="Rule to hide altogether"),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Path to pegtrace.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log progress to stderr"),
) -> None:
    """
    Create an HTML visualization of a PEG parser trace.
    """
    configure_logging(verbose)
    mf = _load_config(config)
    sessions = _read_sessions(input)

    if not sessions:
        print_info(NO_TRACE_MESSAGE)
        return

    out_path = output or Path(mf.render.output)
    write_html(out_path, sessions, _make_filter(mf, flatten, hide), mf.render)
    print_success(f"generated {len(sessions)} trace(s) to {out_path}")


def inspect_command(
    input: Path | None = typer.Argument(
        None, exists=True, dir_okay=False, help="Trace file (default: stdin)"
    ),
    flatten: list[str] | None = typer.Option(None, "--flatten", "-f", help="Rule to flatten"),
    hide: list[str] | None = typer.Option(None, "--hide", "-h", help="Rule to hide altogether"),
    max_depth: int | None = typer.Option(
        None, "--max-depth", "-d", min=0, help="Only show this many levels below each root"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Path to pegtrace.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log progress to stderr"),
) -> None:
    """
    Print the call tree of each trace session.

    End locations read from the trace are marked "parsed", inferred ones
    "backfilled"; a trailing * marks partial matches.
    """
    configure_logging(verbose)
    mf = _load_config(config)
    sessions = _read_sessions(input)

    if not sessions:
        print_info(NO_TRACE_MESSAGE)
        return

    print_sessions(sessions, _make_filter(mf, flatten, hide), max_depth)
