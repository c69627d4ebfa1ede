"""Routes API endpoints.

Provides the route tree in flat or hierarchical form and resolves
URLs to route files.
"""

from aiohttp import web

from routeradar.app_keys import config_key, dev_server_port_key, resolver_key
from routeradar.core.flatten import flatten_routes
from routeradar.core.resolver import split_request_path
from routeradar.core.tree import RouteTreeBuilder, filter_routes
from routeradar.core.types import SortOrder, ViewMode
from routeradar.devserver import dev_server_url


def create_routes_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/routes", get_routes),
        web.get("/api/resolve", resolve_route),
    ]


async def get_routes(request: web.Request) -> web.Response:
    config = request.app[config_key]

    try:
        mode = ViewMode(request.query.get("mode", config.view.mode))
        sorting = SortOrder(request.query.get("sort", config.view.sorting))
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    builder = RouteTreeBuilder(config.project.routes_dir, sort_order=sorting)
    nodes = filter_routes(builder.build(mode), request.query.get("q", ""))
    if mode == ViewMode.FLAT:
        nodes = flatten_routes(nodes)

    return web.json_response(
        {
            "mode": mode.value,
            "sorting": sorting.value,
            "items": [node.to_dict() for node in nodes],
        },
    )


async def resolve_route(request: web.Request) -> web.Response:
    path = request.query.get("path")
    if not path:
        return web.json_response({"error": "Missing path parameter"}, status=400)

    config = request.app[config_key]
    resolver = request.app[resolver_key]

    file_path = resolver.resolve(config.project.routes_dir, path)
    if file_path is None:
        return web.json_response(
            {"error": "No matching route", "path": path},
            status=404,
        )

    # Built from the requested segments so parameters keep their values
    request_path = "/".join(split_request_path(path))
    return web.json_response(
        {
            "path": path,
            "file": str(file_path),
            "url": dev_server_url(request.app[dev_server_port_key], request_path),
        },
    )
