"""Live reload for the route views."""

from .reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
