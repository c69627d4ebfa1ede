"""Application keys for type-safe app configuration access."""

from aiohttp import web

from routeradar.config import Config
from routeradar.core.resolver import RouteResolver
from routeradar.live import LiveReloadManager

config_key = web.AppKey("config", Config)
resolver_key = web.AppKey("resolver", RouteResolver)
dev_server_port_key = web.AppKey("dev_server_port", int)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
