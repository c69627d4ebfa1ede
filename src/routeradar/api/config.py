"""Config API endpoint."""

from aiohttp import web

from routeradar.app_keys import config_key, dev_server_port_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    config = request.app[config_key]
    return web.json_response(
        {
            "liveReloadEnabled": config.live_reload.enabled,
            "mode": config.view.mode.value,
            "sorting": config.view.sorting.value,
            "devServerPort": request.app[dev_server_port_key],
        },
    )
