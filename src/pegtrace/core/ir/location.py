"""Source positions reported by a traced parser.

A trace uses one of two addressing modes: ``line:column`` character
positions when the parser reads a string, or a plain token index when it
reads a token slice. Both variants are immutable, ordered among
themselves, and can be projected to a character offset in the captured
source text.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt

_TOKEN_RE = re.compile(r"\S+")


@lru_cache(maxsize=8)
def _line_starts(text: str) -> tuple[int, ...]:
    starts = [0]
    for match in re.finditer("\n", text):
        starts.append(match.end())
    return tuple(starts)


@lru_cache(maxsize=8)
def _token_starts(text: str) -> tuple[int, ...]:
    return tuple(match.start() for match in _TOKEN_RE.finditer(text))


class _OrderedLocation(BaseModel):
    """Ordering shared by both location variants.

    Only locations of the same variant compare; mixing them raises
    ``TypeError`` like any other unorderable pair.
    """

    model_config = ConfigDict(frozen=True)

    def sort_key(self) -> tuple[int, ...]:
        raise NotImplementedError

    def __lt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


class CharLocation(_OrderedLocation):
    """A 1-based ``line:column`` position in the source text.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
    """

    line: PositiveInt
    column: PositiveInt

    def sort_key(self) -> tuple[int, ...]:
        return (self.line, self.column)

    def offset(self, text: str) -> int:
        """Character offset of this position in ``text``.

        A column past the end of its line clamps to the line's end, and a
        line past the end of the text clamps to ``len(text)``.
        """
        starts = _line_starts(text)
        if self.line > len(starts):
            return len(text)
        start = starts[self.line - 1]
        if self.line < len(starts):
            line_end = starts[self.line] - 1
        else:
            line_end = len(text)
        return min(start + self.column - 1, line_end)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class TokenIndex(_OrderedLocation):
    """A 0-based index into the parser's token sequence.

    Attributes:
        index: Position of the token in the input slice
    """

    index: NonNegativeInt

    def sort_key(self) -> tuple[int, ...]:
        return (self.index,)

    def offset(self, text: str) -> int:
        """Start offset of the ``index``-th whitespace-delimited token in ``text``."""
        starts = _token_starts(text)
        if self.index < len(starts):
            return starts[self.index]
        return len(text)

    def __str__(self) -> str:
        return str(self.index)


Location = CharLocation | TokenIndex

START_OF_INPUT = CharLocation(line=1, column=1)


def parse_location(text: str) -> Location:
    """Build a location from its trace spelling: ``"3:7"`` or ``"12"``."""
    if ":" in text:
        line, _, column = text.partition(":")
        return CharLocation(line=int(line), column=int(column))
    return TokenIndex(index=int(text))
