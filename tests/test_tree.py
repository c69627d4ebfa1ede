"""Tests for route tree builder."""

import logging
from pathlib import Path

import pytest
from routeradar.core.tree import (
    RouteNode,
    RouteTreeBuilder,
    build_route_tree,
    filter_routes,
    iter_nodes,
)
from routeradar.core.types import FileRole, ResetInfo, SegmentKind, SortOrder, ViewMode


def _paths(nodes: list[RouteNode]) -> list[str]:
    return [node.route_path for node in nodes]


class TestRouteTreeBuilderFlat:
    """Tests for RouteTreeBuilder.build() in flat mode."""

    def test_returns_empty_tree_for_missing_dir(self, tmp_path: Path) -> None:
        """Return empty tree when routes directory doesn't exist."""
        builder = RouteTreeBuilder(tmp_path / "nonexistent")

        assert builder.build(ViewMode.FLAT) == []

    def test_logs_missing_dir(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            RouteTreeBuilder(tmp_path / "nonexistent").build()

        assert "Routes directory not found" in caplog.text

    def test_returns_empty_tree_for_empty_dir(self, make_routes) -> None:
        routes = make_routes([])

        assert build_route_tree(routes, ViewMode.FLAT) == []

    def test_root_files_use_root_path(self, make_routes) -> None:
        """Surface every root file as a node with the root route path."""
        routes = make_routes(["+page.svelte", "+layout.svelte", "+error.svelte"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert [n.route_path for n in nodes] == ["/", "/", "/"]
        assert [n.file_type for n in nodes] == [FileRole.PAGE, FileRole.LAYOUT, FileRole.ERROR]
        assert all(n.label == "/" for n in nodes)

    def test_one_leaf_per_route_file(self, make_routes) -> None:
        routes = make_routes(["about/+page.svelte", "about/+page.server.ts", "about/+layout.svelte"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert _paths(nodes) == ["about", "about", "about"]
        assert [n.file_type for n in nodes] == [
            FileRole.PAGE,
            FileRole.PAGE_SERVER,
            FileRole.LAYOUT,
        ]
        assert all(n.children == () for n in nodes)

    def test_directory_files_precede_children(self, make_routes) -> None:
        routes = make_routes(["blog/+page.svelte", "blog/[slug]/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert _paths(nodes) == ["blog", "blog/[slug]"]
        assert nodes[1].kind == SegmentKind.DYNAMIC

    def test_directories_without_files_are_transparent(self, make_routes) -> None:
        routes = make_routes(["(auth)/login/+page.svelte", "api/posts/+server.js"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert _paths(nodes) == ["(auth)/login", "api/posts"]
        assert all(n.file_path is not None for n in nodes)

    def test_skips_hidden_directories(self, make_routes) -> None:
        routes = make_routes([".svelte-kit/+page.svelte", "about/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert _paths(nodes) == ["about"]

    def test_symlink_to_ancestor_is_not_followed(self, make_routes) -> None:
        """Build terminates when a directory links back to an ancestor."""
        routes = make_routes(["blog/+page.svelte"])
        (routes / "blog" / "loop").symlink_to(routes, target_is_directory=True)

        for mode in ViewMode:
            nodes = build_route_tree(routes, mode)

            assert [n.route_path for n in iter_nodes(nodes)] == ["blog"]

    def test_ignores_non_route_files(self, make_routes) -> None:
        routes = make_routes(["about/+page.svelte", "about/Card.svelte", "about/notes.md"])

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert len(nodes) == 1

    def test_orders_siblings_by_kind_then_natural(self, make_routes) -> None:
        routes = make_routes(
            [
                "blog/[...rest]/+page.svelte",
                "blog/[slug]/+page.svelte",
                "blog/10-tenth/+page.svelte",
                "blog/2-second/+page.svelte",
                "blog/[[optional]]/+page.svelte",
            ],
        )

        nodes = build_route_tree(routes, ViewMode.FLAT)

        assert _paths(nodes) == [
            "blog/2-second",
            "blog/10-tenth",
            "blog/[slug]",
            "blog/[[optional]]",
            "blog/[...rest]",
        ]

    def test_basic_sort_order(self, make_routes) -> None:
        routes = make_routes(["item10/+page.svelte", "item2/+page.svelte", "item1/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.FLAT, SortOrder.BASIC)

        assert _paths(nodes) == ["item1", "item10", "item2"]


class TestRouteTreeBuilderHierarchical:
    """Tests for RouteTreeBuilder.build() in hierarchical mode."""

    def test_one_node_per_directory(self, make_routes) -> None:
        routes = make_routes(["about/+page.svelte", "about/team/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.HIERARCHICAL)

        assert len(nodes) == 1
        about = nodes[0]
        assert about.label == "about"
        assert about.file_path == routes / "about" / "+page.svelte"
        assert [child.label for child in about.children] == ["team"]
        assert about.children[0].route_path == "about/team"

    def test_extra_files_become_leaf_children(self, make_routes) -> None:
        routes = make_routes(
            ["blog/+page.svelte", "blog/+layout.svelte", "blog/[slug]/+page.svelte"],
        )

        nodes = build_route_tree(routes, ViewMode.HIERARCHICAL)

        blog = nodes[0]
        assert blog.file_type == FileRole.PAGE
        assert [child.label for child in blog.children] == ["+layout.svelte", "[slug]"]
        assert blog.children[0].file_type == FileRole.LAYOUT
        assert blog.children[0].route_path == "blog"

    def test_root_files_form_single_node(self, make_routes) -> None:
        routes = make_routes(["+page.svelte", "+layout.svelte"])

        nodes = build_route_tree(routes, ViewMode.HIERARCHICAL)

        assert len(nodes) == 1
        assert nodes[0].route_path == "/"
        assert nodes[0].file_path == routes / "+page.svelte"
        assert [child.label for child in nodes[0].children] == ["+layout.svelte"]

    def test_group_without_page_keeps_children(self, make_routes) -> None:
        routes = make_routes(["(auth)/login/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.HIERARCHICAL)

        group = nodes[0]
        assert group.kind == SegmentKind.GROUP
        assert group.file_path is None
        assert group.file_type is None
        assert [child.label for child in group.children] == ["login"]

    def test_drops_empty_directories(self, make_routes) -> None:
        routes = make_routes(["(empty)/", "lib/components/", "about/+page.svelte"])

        nodes = build_route_tree(routes, ViewMode.HIERARCHICAL)

        assert [n.label for n in nodes] == ["about"]

    def test_no_empty_structural_nodes(self, routes_dir: Path) -> None:
        """Every node has a file or children."""
        nodes = build_route_tree(routes_dir, ViewMode.HIERARCHICAL)

        for node in iter_nodes(nodes):
            assert node.file_path is not None or node.children


class TestLayoutReset:
    """Tests for layout reset handling."""

    def test_root_reset_level_is_depth(self, make_routes) -> None:
        routes = make_routes(["dashboard/+page@.svelte"])

        node = build_route_tree(routes, ViewMode.FLAT)[0]

        assert node.reset_info == ResetInfo(reset_target="", layout_level=1)

    def test_group_reset_level(self, make_routes) -> None:
        routes = make_routes(["(app)/dashboard/settings/+page@(app).svelte"])

        node = build_route_tree(routes, ViewMode.FLAT)[0]

        assert node.reset_info == ResetInfo(reset_target="(app)", layout_level=2)

    def test_malformed_reset_becomes_plain_page(
        self,
        routes_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Keep building when a reset target is not an ancestor."""
        with caplog.at_level(logging.WARNING):
            nodes = build_route_tree(routes_dir, ViewMode.FLAT)

        settings = next(n for n in nodes if n.route_path == "dashboard/(admin)/settings")
        assert settings.file_type == FileRole.PAGE
        assert settings.reset_info is None
        assert settings.file_path == routes_dir / "dashboard/(admin)/settings/+page@(auth).svelte"
        assert "(auth)" in caplog.text

    def test_root_file_with_named_reset_is_plain_page(self, make_routes) -> None:
        routes = make_routes(["+page@(app).svelte"])

        node = build_route_tree(routes, ViewMode.FLAT)[0]

        assert node.reset_info is None


class TestRouteTreeBuilderProperties:
    """Tests for properties of complete builds."""

    @pytest.mark.parametrize("mode", list(ViewMode))
    def test_build_is_idempotent(self, routes_dir: Path, mode: ViewMode) -> None:
        builder = RouteTreeBuilder(routes_dir)

        assert builder.build(mode) == builder.build(mode)

    def test_flat_contains_every_route_file(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.FLAT)

        assert len(nodes) == 28

    def test_hierarchical_contains_every_route_file(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.HIERARCHICAL)

        files = {n.file_path for n in iter_nodes(nodes) if n.file_path is not None}
        assert len(files) == 28


class TestRouteNode:
    """Tests for RouteNode."""

    def test_url_path_strips_groups(self) -> None:
        node = RouteNode(label="x", route_path="(app)/settings/[id]")

        assert node.url_path == "/settings/[id]"

    def test_to_dict_with_children(self) -> None:
        child = RouteNode(
            label="team",
            route_path="about/team",
            file_path=Path("/r/about/team/+page.svelte"),
            file_type=FileRole.PAGE,
        )
        node = RouteNode(
            label="about",
            route_path="about",
            file_path=Path("/r/about/+page@.svelte"),
            file_type=FileRole.PAGE,
            reset_info=ResetInfo(reset_target="", layout_level=1),
            children=(child,),
        )

        result = node.to_dict()

        assert result["label"] == "about"
        assert result["urlPath"] == "/about"
        assert result["kind"] == "static"
        assert result["fileType"] == "page"
        assert result["resetInfo"] == {"resetTarget": "", "displayName": "root", "layoutLevel": 1}
        assert result["children"][0]["file"] == str(Path("/r/about/team/+page.svelte"))
        assert "children" not in result["children"][0]


class TestFilterRoutes:
    """Tests for filter_routes()."""

    def test_empty_pattern_keeps_all(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.FLAT)

        assert filter_routes(nodes, "") == nodes

    def test_matches_route_path_case_insensitively(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.FLAT)

        result = filter_routes(nodes, "TEAM")

        assert _paths(result) == ["about/team", "about/team"]

    def test_keeps_ancestors_of_matches(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.HIERARCHICAL)

        result = filter_routes(nodes, "login")

        assert [n.label for n in result] == ["(auth)"]
        assert [c.label for c in result[0].children] == ["login"]

    def test_does_not_modify_input(self, routes_dir: Path) -> None:
        nodes = build_route_tree(routes_dir, ViewMode.HIERARCHICAL)
        before = list(nodes)

        filter_routes(nodes, "login")

        assert nodes == before
