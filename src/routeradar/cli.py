"""CLI interface for RouteRadar.

Command-line tool for exploring and resolving file-system routes.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from routeradar.config import Config
from routeradar.core.flatten import flatten_routes
from routeradar.core.resolver import RouteResolver
from routeradar.core.segments import format_route_path
from routeradar.core.tree import RouteNode, RouteTreeBuilder, filter_routes
from routeradar.core.types import DisplayKind, FileRole, SortOrder, ViewMode
from routeradar.devserver import dev_server_url

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover routeradar.toml)",
)

routes_dir_option = click.option(
    "--routes-dir",
    "-r",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Routes directory (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (show debug logging)",
)
def cli(verbose: bool) -> None:
    """RouteRadar - find your way around file-system routes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@routes_dir_option
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in ViewMode]),
    default=None,
    help="View mode (overrides config, default: flat)",
)
@click.option(
    "--sort",
    "sorting",
    type=click.Choice([s.value for s in SortOrder]),
    default=None,
    help="Sorting of routes with the same kind (overrides config, default: natural)",
)
@click.option(
    "--filter",
    "-f",
    "pattern",
    default="",
    help="Only show routes whose label or path contains this text",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print routes as JSON",
)
def routes(
    config_path: Path | None,
    routes_dir: Path | None,
    mode: str | None,
    sorting: str | None,
    pattern: str,
    as_json: bool,
) -> None:
    """List the routes of the project."""
    config = _load_config(
        config_path,
        routes_dir=routes_dir,
        mode=ViewMode(mode) if mode else None,
        sorting=SortOrder(sorting) if sorting else None,
    )
    routes_root = config.project.routes_dir
    if not routes_root.is_dir():
        _fail(f"Routes directory not found: {routes_root}")

    builder = RouteTreeBuilder(routes_root, sort_order=config.view.sorting)
    nodes = filter_routes(builder.build(config.view.mode), pattern)
    if config.view.mode == ViewMode.FLAT:
        nodes = flatten_routes(nodes)

    if as_json:
        click.echo(json.dumps([node.to_dict() for node in nodes], indent=2))
        return

    if not nodes:
        click.echo("No routes found.")
        return

    for line in _render_nodes(nodes, routes_root):
        click.echo(line)


@cli.command()
@click.argument("path")
@config_option
@routes_dir_option
def resolve(path: str, config_path: Path | None, routes_dir: Path | None) -> None:
    """Find the route file that serves a URL or path.

    PATH may be a full URL (http://localhost:5173/blog/post) or a path
    (/blog/post).
    """
    config = _load_config(config_path, routes_dir=routes_dir)

    file_path = RouteResolver().resolve(config.project.routes_dir, path)
    if file_path is None:
        _fail(f"No matching route found for: {path}")
    click.echo(str(file_path))


@cli.command()
@click.argument("route_path")
@config_option
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Dev server port (overrides config and detection)",
)
def url(route_path: str, config_path: Path | None, port: int | None) -> None:
    """Print the dev server URL of a route path.

    Group segments are removed, so (app)/dashboard becomes /dashboard.
    """
    config = _load_config(config_path, dev_server_port=port)
    click.echo(dev_server_url(config.dev_server_port, route_path.strip("/")))


@cli.command()
@config_option
@routes_dir_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    routes_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Start the routes API server."""
    from routeradar.server import run_server

    config = _load_config(
        config_path,
        routes_dir=routes_dir,
        host=host,
        port=port,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Routes directory: {config.project.routes_dir}")
    click.echo(f"Dev server port: {config.dev_server_port}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


def _load_config(config_path: Path | None, **overrides: Any) -> Config:
    """Load configuration and apply CLI overrides, exiting on errors.

    Args:
        config_path: Explicit config file, or None to auto-discover
        overrides: Keyword arguments for Config.with_overrides()

    Returns:
        Effective configuration
    """
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(**overrides)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _render_nodes(nodes: list[RouteNode], routes_root: Path, depth: int = 0) -> list[str]:
    """Render route nodes as indented text lines."""
    lines: list[str] = []
    for node in nodes:
        if node.kind == DisplayKind.DIVIDER:
            lines.append(f"─────── {node.label} ───────")
            continue
        if node.kind == DisplayKind.SPACER:
            lines.append("")
            continue

        indent = "  " * depth
        label = format_route_path(node.label)
        lines.append(f"{indent}{label}  {_describe(node, routes_root)}".rstrip())
        lines.extend(_render_nodes(list(node.children), routes_root, depth + 1))
    return lines


def _describe(node: RouteNode, routes_root: Path) -> str:
    """Describe a node: kind, file role, group and layout reset."""
    parts = [f"[{node.kind}]"]
    if node.file_type is not None and node.file_type != FileRole.PAGE:
        parts.append(f"[{node.file_type}]")

    group = next(
        (s for s in node.route_path.split("/")[1:] if s.startswith("(") and s.endswith(")")),
        None,
    )
    if group is not None:
        parts.append(f"[{group[1:-1]} group]")

    if node.reset_info is not None:
        parts.append(f"[resets to {node.reset_info.display_name}]")

    if node.file_path is not None:
        parts.append(node.file_path.relative_to(routes_root).as_posix())
    return " ".join(parts)


if __name__ == "__main__":
    cli()
