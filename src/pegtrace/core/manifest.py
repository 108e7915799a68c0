"""
pegtrace.toml configuration.

Example::

    [render]
    output = "trace.html"
    flatten = ["expr", "term"]
    hide = ["_"]
    context_before = 10
    context_after = 25
    title = "PEG trace"
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pegtrace.toml"


@dataclass
class RenderConfig:
    """Rendering defaults."""

    output: str = "trace.html"
    flatten: list[str] = field(default_factory=list)
    hide: list[str] = field(default_factory=list)
    context_before: int = 10  # characters shown before a rule's start
    context_after: int = 25  # characters shown after a rule's end
    title: str = "PEG trace"


@dataclass
class PegtraceConfig:
    """
    Complete pegtrace configuration.

    Built from an optional pegtrace.toml; command-line options are
    layered on top by the CLI.
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    path: Path | None = None


def _get(data: dict[str, Any], key: str, kind: type, default: Any, path: Path) -> Any:
    value = data.get(key, default)
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"{path}: [render].{key} must be an integer")
    if not isinstance(value, kind):
        raise ConfigError(f"{path}: [render].{key} must be of type {kind.__name__}")
    return value


def _get_names(data: dict[str, Any], key: str, path: Path) -> list[str]:
    value = _get(data, key, list, [], path)
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{path}: [render].{key} must be a list of rule names")
    return list(value)


def load_config(path: Path) -> PegtraceConfig:
    """
    Load a pegtrace.toml file.

    Raises:
        ConfigError: If the file cannot be read or has ill-typed values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    render_data = data.get("render", {})
    if not isinstance(render_data, dict):
        raise ConfigError(f"{path}: [render] must be a table")

    defaults = RenderConfig()
    render = RenderConfig(
        output=_get(render_data, "output", str, defaults.output, path),
        flatten=_get_names(render_data, "flatten", path),
        hide=_get_names(render_data, "hide", path),
        context_before=_get(render_data, "context_before", int, defaults.context_before, path),
        context_after=_get(render_data, "context_after", int, defaults.context_after, path),
        title=_get(render_data, "title", str, defaults.title, path),
    )
    if render.context_before < 0 or render.context_after < 0:
        raise ConfigError(f"{path}: context sizes must not be negative")

    logger.debug(f"loaded configuration from {path}")
    return PegtraceConfig(render=render, path=path)


def find_config(directory: Path | None = None) -> Path | None:
    """Return the pegtrace.toml in ``directory`` (default: cwd), if there is one."""
    candidate = (directory or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def resolve_config(explicit: Path | None = None) -> PegtraceConfig:
    """Load ``explicit`` if given, else a pegtrace.toml from cwd, else defaults."""
    path = explicit or find_config()
    if path is None:
        return PegtraceConfig()
    return load_config(path)
