"""Route resolution and route tree construction.

This package provides the segment classifier, resolver, tree builder and
flat view used by the CLI and the HTTP API.
"""

from .flatten import flatten_routes
from .resolver import RouteResolver, resolve_route
from .segments import classify, classify_file, format_route_name, parse_reset_info
from .tree import RouteNode, RouteTreeBuilder, build_route_tree, filter_routes
from .types import DisplayKind, FileRole, ResetInfo, SegmentKind, SortOrder, ViewMode

__all__ = [
    "DisplayKind",
    "FileRole",
    "ResetInfo",
    "RouteNode",
    "RouteResolver",
    "RouteTreeBuilder",
    "SegmentKind",
    "SortOrder",
    "ViewMode",
    "build_route_tree",
    "classify",
    "classify_file",
    "filter_routes",
    "flatten_routes",
    "format_route_name",
    "parse_reset_info",
    "resolve_route",
]
