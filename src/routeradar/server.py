"""aiohttp server for RouteRadar.

Application factory and route registration for the JSON API.
"""

from aiohttp import web

from routeradar.api.config import create_config_routes
from routeradar.api.routes import create_routes_routes
from routeradar.app_keys import (
    config_key,
    dev_server_port_key,
    live_reload_manager_key,
    resolver_key,
)
from routeradar.config import Config
from routeradar.core.resolver import RouteResolver
from routeradar.live import LiveReloadManager
from routeradar.live.reload import create_live_reload_routes


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[config_key] = config
    app[resolver_key] = RouteResolver()
    app[dev_server_port_key] = config.dev_server_port

    app.router.add_routes(create_routes_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        manager = LiveReloadManager(
            config.project.routes_dir,
            watch_patterns=config.live_reload.watch_patterns,
            debounce_ms=config.live_reload.debounce_ms,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
