"""Core type definitions."""

from dataclasses import dataclass
from enum import StrEnum


class SegmentKind(StrEnum):
    """Routing meaning of a directory name."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    REST = "rest"
    OPTIONAL = "optional"
    MATCHER = "matcher"
    GROUP = "group"


class FileRole(StrEnum):
    """Role of a `+`-prefixed route file."""

    PAGE = "page"
    PAGE_CLIENT = "pageClient"
    PAGE_SERVER = "pageServer"
    SERVER = "server"
    LAYOUT = "layout"
    LAYOUT_CLIENT = "layoutClient"
    LAYOUT_SERVER = "layoutServer"
    ERROR = "error"


class DisplayKind(StrEnum):
    """Presentation-only node kinds produced by the flattener."""

    DIVIDER = "divider"
    SPACER = "spacer"


class ViewMode(StrEnum):
    FLAT = "flat"
    HIERARCHICAL = "hierarchical"


class SortOrder(StrEnum):
    NATURAL = "natural"
    BASIC = "basic"


@dataclass(frozen=True)
class ResetInfo:
    """Layout reset carried by a `+page@<target>.svelte` file.

    An empty reset_target means the page resets to the root layout.
    layout_level is the number of ancestor route segments skipped to reach
    the target layout.
    """

    reset_target: str
    layout_level: int = 0

    @property
    def display_name(self) -> str:
        return self.reset_target or "root"
