"""
pegtrace CLI.

- trace.py: render and inspect commands
- utils.py: Shared utilities (version, logging, console output)
"""

import sys

import typer

from pegtrace.cli.trace import inspect_command, render_command
from pegtrace.cli.utils import get_version, version_callback

app = typer.Typer(
    help="""pegtrace – call trees for PEG parser traces

Feed it the output of a parser built with tracing enabled
([PEG_INPUT_START] / [PEG_TRACE_START] / [PEG_TRACE] ... / [PEG_TRACE_STOP]).
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """pegtrace CLI main callback for global options."""
    pass


app.command(name="render")(render_command)
app.command(name="inspect")(inspect_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]


if __name__ == "__main__":
    main(sys.argv[1:])
