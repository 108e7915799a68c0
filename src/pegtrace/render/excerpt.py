"""
Three-part source excerpts for a rule: context before it, the text it
matched, and context after it.
"""

from __future__ import annotations

from dataclasses import dataclass

from pegtrace.core.ir import Rule

ELLIPSIS = "…"
BACKTRACK = "↩"


@dataclass(frozen=True)
class Excerpt:
    """
    Source text around one rule.

    Attributes:
        before: Context preceding the rule's start
        matched: Text between start and end (empty if unknown or zero-length)
        after: Context following the end (or the start when the end is unknown)
        backtracked: The end lies before the start
        truncated: More text follows ``after``
    """

    before: str
    matched: str
    after: str
    backtracked: bool = False
    truncated: bool = False


def _clamp(offset: int, text: str) -> int:
    return max(0, min(offset, len(text)))


def make_excerpt(rule: Rule, text: str, before: int = 10, after: int = 25) -> Excerpt:
    """
    Cut the excerpt for ``rule`` out of ``text``.

    Offsets outside the text are clamped to its bounds.
    """
    start = _clamp(rule.loc.offset(text), text)
    leading = text[max(0, start - before) : start]

    matched = ""
    backtracked = False
    tail_from = start
    if rule.next_loc is not None:
        end = _clamp(rule.next_loc.offset(text), text)
        if end > start:
            matched = text[start:end]
        elif end < start:
            backtracked = True
        tail_from = end

    tail_to = min(tail_from + after, len(text))
    return Excerpt(
        before=leading,
        matched=matched,
        after=text[tail_from:tail_to],
        backtracked=backtracked,
        truncated=len(text) > tail_from + after,
    )
