"""WebSocket-based refresh notifications for the route views.

Watches the routes directory and tells connected clients to fetch the
route tree again. Bursts of file system events are coalesced by the
watcher's debounce window into a single notification.
"""

import asyncio
import json
import logging
import weakref
from collections.abc import Iterable
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import awatch

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Clients rebuild their view by requesting the route tree again; the
    manager itself keeps no route state.
    """

    def __init__(
        self,
        routes_dir: Path,
        watch_patterns: list[str] | None = None,
        *,
        debounce_ms: int = 300,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            routes_dir: Directory to watch for changes
            watch_patterns: Glob patterns to watch (default: every path)
            debounce_ms: Window for grouping file system events
        """
        self._routes_dir = routes_dir
        self._watch_patterns = watch_patterns
        self._debounce_ms = debounce_ms
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        if not self._routes_dir.exists():
            logger.warning(f"Routes directory not found, live reload disabled: {self._routes_dir}")
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Cancel the watcher task and close every client socket."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Keep a client connected until it closes the socket.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast refresh events."""
        async for changes in awatch(self._routes_dir, debounce=self._debounce_ms):
            paths = self.changed_route_paths(Path(path_str) for _, path_str in changes)
            if paths:
                logger.debug(f"Routes changed: {', '.join(paths)}")
                await self._broadcast_refresh(paths)

    def changed_route_paths(self, changed: Iterable[Path]) -> list[str]:
        """Filter changed file paths down to watched routes paths.

        Args:
            changed: Iterable of absolute file paths

        Returns:
            Sorted, de-duplicated paths relative to the routes directory
        """
        result: set[str] = set()
        for path in changed:
            relative = self._relative(path)
            if relative is not None and self._matches_patterns(relative):
                result.add(relative.as_posix())
        return sorted(result)

    def _relative(self, path: Path) -> Path | None:
        try:
            return path.relative_to(self._routes_dir)
        except ValueError:
            return None

    def _matches_patterns(self, relative: Path) -> bool:
        """Check if a relative path matches any watch pattern."""
        if self._watch_patterns is None:
            return True
        return any(relative.match(pattern) for pattern in self._watch_patterns)

    async def _broadcast_refresh(self, paths: list[str]) -> None:
        """Broadcast refresh event to all connected clients.

        Args:
            paths: Changed paths relative to the routes directory
        """
        if not self._connections:
            return

        message = json.dumps({"type": "refresh", "paths": paths})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Socket went away between the closed check and the send
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create the live reload WebSocket route.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
