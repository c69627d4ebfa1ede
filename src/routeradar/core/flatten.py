"""Flat route view.

Turns a route tree into a single list grouped by top-level segment.
Each section starts with a divider, and spacers separate unrelated
sub-trees that share the same top-level segment.
"""

from dataclasses import replace

from routeradar.core.segments import classify
from routeradar.core.tree import ROOT_ROUTE_PATH, RouteNode
from routeradar.core.types import DisplayKind, SegmentKind

ROOT_SECTION = "root"


def section_of(route_path: str) -> tuple[str, str]:
    """Return the (top-level, second-level) sections of a route path.

    The second-level section is empty for top-level routes.
    """
    if route_path == ROOT_ROUTE_PATH or not route_path:
        return ROOT_SECTION, ""
    segments = route_path.split("/")
    sub_section = "/".join(segments[:2]) if len(segments) > 1 else ""
    return segments[0], sub_section


def format_divider_label(section: str) -> str:
    if classify(section) == SegmentKind.GROUP:
        return f"{section[1:-1]} (group)"
    return section


def flatten_routes(tree: list[RouteNode]) -> list[RouteNode]:
    """Flatten a route tree into dividers, spacers and depth-0 nodes.

    Sections are sorted by name; within a section nodes keep the tree
    order and every tree node appears exactly once without children.
    """
    sections: dict[str, list[RouteNode]] = {}
    last_sub_section: dict[str, str] = {}

    def visit(node: RouteNode) -> None:
        if node.is_display_only:
            return
        section, sub_section = section_of(node.route_path)
        items = sections.setdefault(section, [])

        previous = last_sub_section.get(section, "")
        if sub_section and previous and sub_section != previous:
            items.append(RouteNode(label="", route_path="", kind=DisplayKind.SPACER))
        if sub_section:
            last_sub_section[section] = sub_section

        items.append(replace(node, children=()))
        for child in node.children:
            visit(child)

    for node in tree:
        visit(node)

    flat: list[RouteNode] = []
    for section in sorted(sections):
        flat.append(
            RouteNode(
                label=format_divider_label(section),
                route_path="",
                kind=DisplayKind.DIVIDER,
            ),
        )
        flat.extend(sections[section])
    return flat
