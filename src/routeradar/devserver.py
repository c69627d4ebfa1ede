"""Development server helpers.

Finds the port the project's dev server listens on and builds browser
URLs for routes.
"""

import logging
import re
from pathlib import Path

from routeradar.core.segments import route_url_path

logger = logging.getLogger(__name__)

DEFAULT_DEV_SERVER_PORT = 5173

CONFIG_FILES = ("svelte.config.js", "vite.config.js", "vite.config.ts")

_PORT_RE = re.compile(r"port:\s*(\d+)")


def detect_dev_server_port(project_root: Path, default: int = DEFAULT_DEV_SERVER_PORT) -> int:
    """Detect the dev server port from the project's bundler config.

    Args:
        project_root: Project directory containing the config files
        default: Port to use when no config file declares one

    Returns:
        First ``port: <number>`` found in the known config files
    """
    for name in CONFIG_FILES:
        config_path = project_root / name
        if not config_path.exists():
            continue
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Error reading config file {config_path}: {e}")
            continue
        match = _PORT_RE.search(content)
        if match:
            return int(match.group(1))
    return default


def dev_server_url(port: int, route_path: str, host: str = "localhost") -> str:
    """Build the browser URL of a route on the dev server.

    Examples:
        >>> dev_server_url(5173, "(app)/dashboard/(admin)/settings")
        'http://localhost:5173/dashboard/settings'
    """
    return f"http://{host}:{port}{route_url_path(route_path)}"
