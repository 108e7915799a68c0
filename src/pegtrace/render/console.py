"""
Terminal view of trace sessions as ``rich`` trees.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from pegtrace.core.filters import NO_FILTER, TraceFilter
from pegtrace.core.ir import Node, NodeState, TraceSession

STATE_STYLES = {
    NodeState.SUCCESS: "bold green",
    NodeState.FAILURE: "bold red",
    NodeState.UNKNOWN: "bold blue",
}


def node_label(node: Node, root: bool = False) -> Text:
    """One-line description: name, location range, and end-location origin."""
    label = Text(node.rule.name, style=STATE_STYLES[node.state])
    if root:
        return label

    rule = node.rule
    label.append(f" {rule.loc}", style="cyan")
    if rule.next_loc is not None:
        origin = "backfilled" if rule.next_loc_inferred else "parsed"
        label.append(f" → {rule.next_loc}", style="cyan")
        label.append(f" ({origin})", style="bright_black")
    if node.partial_match:
        label.append(" *", style="yellow")
    return label


def build_tree(
    session: TraceSession,
    trace_filter: TraceFilter = NO_FILTER,
    max_depth: int | None = None,
) -> Tree:
    """Build a rich tree for ``session``, honouring the filter and depth limit."""
    root = trace_filter.resolve(session.root)
    tree = Tree(node_label(root, root=root is session.root))
    pending: list[tuple[Node, Tree, int]] = [(root, tree, 0)]
    while pending:
        node, branch, depth = pending.pop()
        children = trace_filter.visible_children(node)
        if max_depth is not None and depth >= max_depth:
            if children:
                branch.add(Text(f"… {len(children)} more", style="bright_black"))
            continue
        for child in children:
            pending.append((child, branch.add(node_label(child)), depth + 1))
    return tree


def print_sessions(
    sessions: list[TraceSession],
    trace_filter: TraceFilter = NO_FILTER,
    max_depth: int | None = None,
    console: Console | None = None,
) -> None:
    console = console or Console()
    for session in sessions:
        console.print(build_tree(session, trace_filter, max_depth))
        console.print()
