"""
pegtrace CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.style import Style
from rich.text import Text

from pegtrace._version import get_version

LOG_LEVEL_ENV = "PEGTRACE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "info": Style(color="cyan"),
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(Text(f"ℹ {message}", style=STYLES["info"]))


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging once per process.

    ``--verbose`` selects DEBUG; otherwise the level comes from
    PEGTRACE_LOG_LEVEL (default WARNING).
    """
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("pegtrace").setLevel(level)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        pegtrace_version = get_version()

        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        try:
            import pegtrace

            install_location = Path(pegtrace.__file__).parent
        except Exception:
            install_location = Path.cwd()

        typer.echo(f"pegtrace version {pegtrace_version}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Location:      {install_location}")

        raise typer.Exit()
