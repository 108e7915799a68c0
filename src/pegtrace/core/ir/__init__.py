"""
pegtrace Intermediate Representation (IR) types.

Locations, rules, call-tree nodes, and trace sessions. All types are
re-exported from this package.
"""

from .location import (
    START_OF_INPUT,
    CharLocation,
    Location,
    TokenIndex,
    parse_location,
)
from .tree import (
    Node,
    NodeState,
    Rule,
    TraceSession,
    make_root,
)

__all__ = [
    # Locations
    "START_OF_INPUT",
    "CharLocation",
    "Location",
    "TokenIndex",
    "parse_location",
    # Tree
    "Node",
    "NodeState",
    "Rule",
    "TraceSession",
    "make_root",
]
