"""Shared pytest fixtures for pegtrace tests."""

from pathlib import Path

import pytest

from pegtrace.core.ir import CharLocation, Node, NodeState, Rule, TraceSession
from pegtrace.core.parser import parse_trace_file

SPEC_SCENARIO = """\
[PEG_INPUT_START]
abc
[PEG_TRACE_START]
[PEG_TRACE] Attempting to match rule Foo at 1:1 (pos 0)
[PEG_TRACE] Attempting to match rule Bar at 1:1 (pos 0)
[PEG_TRACE] Matched rule Bar at 1:1 to 1:2
[PEG_TRACE] Matched rule Foo at 1:1 to 1:2
[PEG_TRACE_STOP]
"""


def loc(line: int, column: int) -> CharLocation:
    return CharLocation(line=line, column=column)


def make_node(
    name: str,
    start: CharLocation,
    end: CharLocation | None = None,
    state: NodeState = NodeState.SUCCESS,
    children: list[Node] | None = None,
) -> Node:
    return Node(
        rule=Rule(name=name, loc=start, next_loc=end),
        state=state,
        children=children or [],
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def ranges_trace(fixtures_dir: Path) -> Path:
    """Trace of a string parser (line:column locations)."""
    return fixtures_dir / "ranges.txt"


@pytest.fixture
def indices_trace(fixtures_dir: Path) -> Path:
    """Trace of a token-slice parser (token index locations), two sessions."""
    return fixtures_dir / "indices.txt"


@pytest.fixture
def ranges_session(ranges_trace: Path) -> TraceSession:
    """The single finished session of the ranges fixture."""
    sessions = parse_trace_file(ranges_trace)
    assert len(sessions) == 1
    return sessions[0]
