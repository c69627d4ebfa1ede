"""Route tree builder.

Builds an in-memory tree of routes from the routes directory for the
route views. The tree is rebuilt from disk on every call and never
modified afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TypedDict

from routeradar.core.fs import FileSystem, LocalFileSystem
from routeradar.core.segments import (
    classify,
    classify_file,
    compute_layout_level,
    parse_reset_info,
    route_url_path,
)
from routeradar.core.sorting import sort_entries
from routeradar.core.types import (
    DisplayKind,
    FileRole,
    ResetInfo,
    SegmentKind,
    SortOrder,
    ViewMode,
)

logger = logging.getLogger(__name__)

ROOT_ROUTE_PATH = "/"

_ROLE_ORDER: dict[FileRole, int] = {role: index for index, role in enumerate(FileRole)}


class ResetInfoDict(TypedDict):
    resetTarget: str
    displayName: str
    layoutLevel: int


class RouteNodeDict(TypedDict, total=False):
    """Dictionary representation of a route node."""

    label: str
    routePath: str
    urlPath: str
    file: str | None
    kind: str
    fileType: str | None
    resetInfo: ResetInfoDict | None
    children: list[RouteNodeDict]


@dataclass(frozen=True)
class RouteNode:
    """Node of the route tree.

    file_path is None for structural nodes (groups without a page,
    dividers and spacers). route_path keeps the raw folder names.
    """

    label: str
    route_path: str
    file_path: Path | None = None
    kind: SegmentKind | DisplayKind = SegmentKind.STATIC
    file_type: FileRole | None = None
    reset_info: ResetInfo | None = None
    children: tuple[RouteNode, ...] = field(default_factory=tuple)

    @property
    def is_display_only(self) -> bool:
        return isinstance(self.kind, DisplayKind)

    @property
    def url_path(self) -> str:
        """URL path a browser requests for this route, groups removed."""
        return route_url_path(self.route_path)

    def to_dict(self) -> RouteNodeDict:
        """Convert to dictionary for JSON serialization."""
        result: RouteNodeDict = {
            "label": self.label,
            "routePath": self.route_path,
            "kind": str(self.kind),
        }
        if self.is_display_only:
            return result

        result["urlPath"] = self.url_path
        result["file"] = str(self.file_path) if self.file_path else None
        result["fileType"] = str(self.file_type) if self.file_type else None
        result["resetInfo"] = (
            {
                "resetTarget": self.reset_info.reset_target,
                "displayName": self.reset_info.display_name,
                "layoutLevel": self.reset_info.layout_level,
            }
            if self.reset_info
            else None
        )
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass(frozen=True)
class RouteFile:
    """Route file found in a directory."""

    path: Path
    role: FileRole
    reset_info: ResetInfo | None = None


class RouteTreeBuilder:
    """Builds route trees from a routes directory.

    Args:
        routes_dir: Root routes directory (e.g., ``src/routes``)
        fs: Directory listing implementation, local disk by default
        sort_order: Ordering of entries that share a segment kind
    """

    def __init__(
        self,
        routes_dir: Path,
        fs: FileSystem | None = None,
        *,
        sort_order: SortOrder = SortOrder.NATURAL,
    ) -> None:
        self._routes_dir = routes_dir
        self._fs = fs or LocalFileSystem()
        self._sort_order = sort_order

    @property
    def routes_dir(self) -> Path:
        return self._routes_dir

    def build(self, mode: ViewMode = ViewMode.FLAT) -> list[RouteNode]:
        """Build the route tree.

        Args:
            mode: FLAT yields one leaf per route file, HIERARCHICAL one
                  node per directory

        Returns:
            Top-level route nodes, empty if the routes directory is
            missing or cannot be read
        """
        if not self._fs.exists(self._routes_dir):
            logger.warning(f"Routes directory not found: {self._routes_dir}")
            return []
        try:
            return self._build_dir(self._routes_dir, "", mode)
        except OSError as e:
            logger.warning(f"Cannot read routes directory {self._routes_dir}: {e}")
            return []

    def find_route_files(self, directory: Path, route_path: str) -> list[RouteFile]:
        """Collect the route files of a directory in display order.

        Reset pages whose target is not an ancestor are kept as plain pages.
        """
        files: list[RouteFile] = []
        for entry in self._fs.list_entries(directory):
            if entry.is_dir:
                continue
            role = classify_file(entry.name)
            if role is None:
                continue
            files.append(
                RouteFile(
                    path=directory / entry.name,
                    role=role,
                    reset_info=self._reset_info(entry.name, route_path, directory),
                ),
            )
        files.sort(key=lambda f: (_ROLE_ORDER[f.role], f.path.name))
        return files

    def _reset_info(self, file_name: str, route_path: str, directory: Path) -> ResetInfo | None:
        info = parse_reset_info(file_name)
        if info is None:
            return None

        level = compute_layout_level(route_path, info.reset_target)
        if level is None:
            logger.warning(
                f"Layout reset target '{info.reset_target}' of {directory / file_name} "
                "is not an ancestor, treating it as a plain page",
            )
            return None
        return replace(info, layout_level=level)

    def _build_dir(self, directory: Path, base_path: str, mode: ViewMode) -> list[RouteNode]:
        entries = [e for e in self._fs.list_entries(directory) if not e.name.startswith(".")]
        nodes: list[RouteNode] = []

        if not base_path:
            root_files = self.find_route_files(directory, "")
            if mode == ViewMode.FLAT:
                nodes.extend(
                    _leaf(ROOT_ROUTE_PATH, ROOT_ROUTE_PATH, f, SegmentKind.STATIC)
                    for f in root_files
                )
            elif root_files:
                nodes.append(
                    _directory_node(
                        ROOT_ROUTE_PATH, ROOT_ROUTE_PATH, SegmentKind.STATIC, root_files, []
                    ),
                )

        dir_names = sort_entries((e.name for e in entries if e.is_dir), self._sort_order)
        for name in dir_names:
            route_path = f"{base_path}/{name}" if base_path else name
            kind = classify(name)
            child_dir = directory / name
            children = self._build_dir(child_dir, route_path, mode)
            files = self.find_route_files(child_dir, route_path)

            if mode == ViewMode.FLAT:
                nodes.extend(_leaf(route_path, route_path, f, kind) for f in files)
                nodes.extend(children)
            elif files or children:
                nodes.append(_directory_node(name, route_path, kind, files, children))

        return nodes


def _leaf(label: str, route_path: str, route_file: RouteFile, kind: SegmentKind) -> RouteNode:
    return RouteNode(
        label=label,
        route_path=route_path,
        file_path=route_file.path,
        kind=kind,
        file_type=route_file.role,
        reset_info=route_file.reset_info,
    )


def _directory_node(
    label: str,
    route_path: str,
    kind: SegmentKind,
    files: list[RouteFile],
    children: list[RouteNode],
) -> RouteNode:
    """Create a hierarchical node; the first file represents the directory."""
    if not files:
        return RouteNode(label=label, route_path=route_path, kind=kind, children=tuple(children))

    primary, *others = files
    extra = [_leaf(f.path.name, route_path, f, kind) for f in others]
    return RouteNode(
        label=label,
        route_path=route_path,
        file_path=primary.path,
        kind=kind,
        file_type=primary.role,
        reset_info=primary.reset_info,
        children=tuple(extra + children),
    )


def build_route_tree(
    routes_dir: Path,
    mode: ViewMode = ViewMode.FLAT,
    sort_order: SortOrder = SortOrder.NATURAL,
    fs: FileSystem | None = None,
) -> list[RouteNode]:
    """Build the route tree for a routes directory.

    Convenience wrapper around RouteTreeBuilder.build().
    """
    return RouteTreeBuilder(routes_dir, fs, sort_order=sort_order).build(mode)


def iter_nodes(nodes: list[RouteNode] | tuple[RouteNode, ...]) -> Iterator[RouteNode]:
    """Iterate over nodes and all their descendants, depth first."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def filter_routes(nodes: list[RouteNode], pattern: str) -> list[RouteNode]:
    """Keep nodes whose label or route path contains the pattern.

    Matching is case-insensitive. Ancestors of matching nodes are kept
    with their children narrowed down. Display-only nodes never match.

    Args:
        nodes: Route nodes to filter
        pattern: Search text; empty keeps everything

    Returns:
        New list of nodes, the input is not modified
    """
    if not pattern:
        return list(nodes)

    needle = pattern.lower()
    result: list[RouteNode] = []
    for node in nodes:
        if node.is_display_only:
            continue
        children = filter_routes(list(node.children), pattern)
        matched = needle in node.label.lower() or needle in node.route_path.lower()
        if matched or children:
            result.append(replace(node, children=tuple(children)))
    return result
