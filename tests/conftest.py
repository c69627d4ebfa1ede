"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from routeradar.config import (
    Config,
    DevServerConfig,
    LiveReloadConfig,
    ProjectConfig,
    ServerConfig,
    ViewConfig,
)

SAMPLE_ROUTE_FILES = [
    "+page.svelte",
    "+layout.svelte",
    "+error.svelte",
    "about/+page.svelte",
    "about/team/+page.svelte",
    "about/team/+layout.svelte",
    "about/[slug]/+page.svelte",
    "api/posts/+server.js",
    "api/comments/[id]/+server.js",
    "blog/+layout.svelte",
    "blog/1-first/+page.svelte",
    "blog/2-second/+page.svelte",
    "blog/10-tenth/+page.svelte",
    "blog/[slug]/+page.svelte",
    "blog/[[optional]]/+page.svelte",
    "blog/[...rest]/+page.svelte",
    "blog/category/[...slug]/+page.svelte",
    "(auth)/login/+page.svelte",
    "(auth)/register/+page.svelte",
    "docs/+layout.svelte",
    "docs/[[lang]]/+page.svelte",
    "docs/[[lang]]/+layout.svelte",
    "dashboard/+layout.svelte",
    "dashboard/+page@.svelte",
    "dashboard/(admin)/settings/+page@(auth).svelte",
    "products/+layout.svelte",
    "products/[id=integer]/+page.svelte",
    "products/[slug]/+page.svelte",
]


@pytest.fixture
def make_routes(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Return a factory creating a routes directory from relative file paths.

    Paths ending with "/" create empty directories.
    """

    def factory(files: list[str]) -> Path:
        routes_dir = tmp_path / "src" / "routes"
        routes_dir.mkdir(parents=True, exist_ok=True)
        for relative in files:
            target = routes_dir / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("")
        return routes_dir

    return factory


@pytest.fixture
def routes_dir(make_routes: Callable[[list[str]], Path]) -> Path:
    """Create a sample SvelteKit routes directory."""
    return make_routes(SAMPLE_ROUTE_FILES)


@pytest.fixture
def test_config(tmp_path: Path, routes_dir: Path) -> Config:
    """Create a test configuration pointing at the sample routes."""
    return Config(
        server=ServerConfig(),
        project=ProjectConfig(root=tmp_path, routes_dir=routes_dir),
        view=ViewConfig(),
        dev_server=DevServerConfig(port=5173),
        live_reload=LiveReloadConfig(enabled=False),
    )
