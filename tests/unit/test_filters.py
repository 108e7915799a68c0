"""Tests for flatten/hide filtering."""

from conftest import loc, make_node

from pegtrace.core.filters import NO_FILTER, TraceFilter
from pegtrace.core.ir import Node, TraceSession
from pegtrace.render.html import iter_rows


def chain() -> Node:
    """root -> wrap1 -> wrap2 -> leaf, plus a sibling ws next to wrap1."""
    leaf = make_node("leaf", loc(1, 1), loc(1, 2))
    wrap2 = make_node("wrap2", loc(1, 1), children=[leaf])
    wrap1 = make_node("wrap1", loc(1, 1), children=[wrap2])
    ws = make_node("ws", loc(1, 2), children=[make_node("space", loc(1, 2))])
    return make_node("root", loc(1, 1), children=[wrap1, ws])


def snapshot(root: Node) -> list[tuple[str, int, str]]:
    return [(node.rule.name, len(node.children), node.state.value) for node in root.walk()]


class TestTraceFilter:
    def test_flatten_chains(self) -> None:
        root = chain()
        trace_filter = TraceFilter.from_names(flatten=["wrap1", "wrap2"])
        visible = trace_filter.visible_children(root)
        assert [node.rule.name for node in visible] == ["leaf", "ws"]

    def test_flatten_requires_exactly_one_child(self) -> None:
        parent = make_node("wrap", loc(1, 1), children=[make_node("a", loc(1, 1)), make_node("b", loc(1, 2))])
        trace_filter = TraceFilter.from_names(flatten=["wrap"])
        assert not trace_filter.should_flatten(parent)
        assert trace_filter.resolve(parent) is parent

    def test_hide_drops_subtree(self) -> None:
        root = chain()
        trace_filter = TraceFilter.from_names(hide=["ws"])
        assert [node.rule.name for node in trace_filter.visible_children(root)] == ["wrap1"]

    def test_empty_filter_shows_everything(self) -> None:
        root = chain()
        assert NO_FILTER.visible_children(root) == root.children

    def test_filters_do_not_mutate_tree(self, ranges_session: TraceSession) -> None:
        before = snapshot(ranges_session.root)
        trace_filter = TraceFilter.from_names(flatten=["expr", "sum"], hide=["number"])
        list(iter_rows(ranges_session, trace_filter))
        assert snapshot(ranges_session.root) == before

    def test_rendering_without_filters_visits_every_node(self, ranges_session: TraceSession) -> None:
        filtered = TraceFilter.from_names(hide=["number"])
        list(iter_rows(ranges_session, filtered))
        rows = list(iter_rows(ranges_session, NO_FILTER))
        opened = [row for row in rows if row.opening]
        assert len(opened) == ranges_session.root.count()
        assert len(rows) == 2 * len(opened)
