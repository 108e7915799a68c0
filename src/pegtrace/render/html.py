"""
HTML renderer for trace sessions.

Each displayed node becomes a ``<details>`` element whose summary shows the
rule name, coloured by outcome, and an excerpt of the source around it.
The tree is flattened into a sequence of open/close rows first so that
arbitrarily deep traces render without recursion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from pegtrace.core.filters import NO_FILTER, TraceFilter
from pegtrace.core.ir import Node, TraceSession
from pegtrace.core.manifest import RenderConfig

from .excerpt import Excerpt, make_excerpt

logger = logging.getLogger(__name__)

# Template directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


@dataclass(frozen=True)
class Row:
    """One step of the flattened tree: open a node's section, or close one."""

    opening: bool
    name: str = ""
    css_class: str = ""
    excerpt: Excerpt | None = None


_CLOSE = Row(opening=False)


def css_class(node: Node) -> str:
    """Outcome classes for a node's rule label."""
    classes = [node.state.value]
    if node.partial_match:
        classes.append("partial")
    return " ".join(classes)


def iter_rows(
    session: TraceSession,
    trace_filter: TraceFilter = NO_FILTER,
    context_before: int = 10,
    context_after: int = 25,
) -> Iterator[Row]:
    """Yield open/close rows for ``session`` in document order."""
    pending: list[Node | None] = [trace_filter.resolve(session.root)]
    while pending:
        node = pending.pop()
        if node is None:
            yield _CLOSE
            continue
        yield Row(
            opening=True,
            name=node.rule.name,
            css_class=css_class(node),
            excerpt=make_excerpt(node.rule, session.text, context_before, context_after),
        )
        pending.append(None)
        pending.extend(reversed(trace_filter.visible_children(node)))


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_html(
    sessions: Sequence[TraceSession],
    trace_filter: TraceFilter = NO_FILTER,
    config: RenderConfig | None = None,
) -> str:
    """
    Render all sessions into one standalone HTML document.

    Args:
        sessions: Finished (backfilled and classified) sessions
        trace_filter: Flatten/hide filter applied while walking each tree
        config: Rendering options; defaults apply when omitted

    Returns:
        The HTML document
    """
    config = config or RenderConfig()
    env = _environment()
    template = env.get_template("trace.html")

    traces = [
        iter_rows(session, trace_filter, config.context_before, config.context_after)
        for session in sessions
    ]
    return template.render(
        title=config.title,
        style=Markup((TEMPLATES_DIR / "style.css").read_text(encoding="utf-8")),
        script=Markup((TEMPLATES_DIR / "script.js").read_text(encoding="utf-8")),
        traces=traces,
    )


def write_html(
    path: Path,
    sessions: Sequence[TraceSession],
    trace_filter: TraceFilter = NO_FILTER,
    config: RenderConfig | None = None,
) -> Path:
    """Render ``sessions`` and write the document to ``path``."""
    document = render_html(sessions, trace_filter, config)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    logger.info(f"wrote {len(sessions)} trace(s) to {path}")
    return path
