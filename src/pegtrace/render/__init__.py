"""
Presentation of finished trace sessions: HTML documents and terminal trees.
"""

from .console import build_tree, print_sessions
from .excerpt import Excerpt, make_excerpt
from .html import iter_rows, render_html, write_html

__all__ = [
    "build_tree",
    "print_sessions",
    "Excerpt",
    "make_excerpt",
    "iter_rows",
    "render_html",
    "write_html",
]
