"""Segment classification for file-system encoded routes.

Directory names encode routing semantics:

    (group)          zero-width grouping folder
    [...rest]        one or more trailing segments
    [[optional]]     zero or one segment
    [param=matcher]  one segment satisfying a named matcher
    [param]          any single segment
    anything else    literal segment

Route files start with ``+`` (``+page.svelte``, ``+server.ts``, ...).
"""

import re

from routeradar.core.types import FileRole, ResetInfo, SegmentKind

# Character escapes allowed in route directory names, e.g. [x+3a] for ':'
_HEX_ESCAPE_RE = re.compile(r"\[x\+([0-9a-fA-F]{2})\]")
_UNICODE_ESCAPE_RE = re.compile(r"\[u\+([0-9a-fA-F]{4,5})\]")

_RESET_PAGE_RE = re.compile(r"^\+page@(.*)\.svelte$")

_ROUTE_FILE_PATTERNS: tuple[tuple[re.Pattern[str], FileRole], ...] = (
    (re.compile(r"^\+page\.svelte$"), FileRole.PAGE),
    (re.compile(r"^\+page\.server\.[jt]s$"), FileRole.PAGE_SERVER),
    (re.compile(r"^\+page\.[jt]s$"), FileRole.PAGE_CLIENT),
    (re.compile(r"^\+server\.[jt]s$"), FileRole.SERVER),
    (re.compile(r"^\+layout(@[^.]*)?\.svelte$"), FileRole.LAYOUT),
    (re.compile(r"^\+layout\.server\.[jt]s$"), FileRole.LAYOUT_SERVER),
    (re.compile(r"^\+layout\.[jt]s$"), FileRole.LAYOUT_CLIENT),
    (re.compile(r"^\+error\.svelte$"), FileRole.ERROR),
)

_GROUP_RE = re.compile(r"^\((.+)\)$")
_PARAM_NAME = r"([^\[\]=]+)"

# Normalization rules, applied in this order: (pattern, display, bare).
_PARAM_RULES: tuple[tuple[re.Pattern[str], str, str], ...] = (
    (re.compile(rf"\[\.\.\.{_PARAM_NAME}\]"), r"*\1", r"\1"),
    (re.compile(rf"\[\[{_PARAM_NAME}(?:=[^\]]+)?\]\]"), r"\1?", r"\1"),
    (re.compile(rf"\[{_PARAM_NAME}=[^\]]+\]"), r":\1", r"\1"),
    (re.compile(rf"\[{_PARAM_NAME}\]"), r":\1", r"\1"),
)

_MATCHER_RE = re.compile(r"\[([^\[\]=]+)=([^\]]+)\]")


def decode_route_path(name: str) -> str:
    """Decode ``[x+HH]`` and ``[u+HHHH]`` character escapes."""
    name = _HEX_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), name)
    return _UNICODE_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), name)


def _strip_escapes(name: str) -> str:
    return _UNICODE_ESCAPE_RE.sub("", _HEX_ESCAPE_RE.sub("", name))


def classify(entry_name: str) -> SegmentKind:
    """Classify a directory name into its segment kind.

    Every string maps to exactly one kind; unknown syntax is static.
    """
    if entry_name.startswith("(") and entry_name.endswith(")"):
        return SegmentKind.GROUP
    if "[" not in _strip_escapes(entry_name):
        return SegmentKind.STATIC
    if entry_name.startswith("[[") and entry_name.endswith("]]"):
        return SegmentKind.OPTIONAL
    if entry_name.startswith("[..."):
        return SegmentKind.REST
    if "=" in entry_name:
        return SegmentKind.MATCHER
    return SegmentKind.DYNAMIC


def classify_file(file_name: str) -> FileRole | None:
    """Return the role of a route file, or None for non-route files."""
    if not file_name.startswith("+"):
        return None
    # Reset pages win over the plain page pattern
    if _RESET_PAGE_RE.match(file_name):
        return FileRole.PAGE
    for pattern, role in _ROUTE_FILE_PATTERNS:
        if pattern.match(file_name):
            return role
    return None


def parse_reset_info(file_name: str) -> ResetInfo | None:
    """Parse the reset target of a ``+page@<target>.svelte`` file.

    The layout level is left at 0; it depends on where the file lives and
    is filled in by the tree builder (see compute_layout_level).
    """
    match = _RESET_PAGE_RE.match(file_name)
    if match is None:
        return None
    return ResetInfo(reset_target=match.group(1))


def is_reset_page(file_name: str) -> bool:
    return _RESET_PAGE_RE.match(file_name) is not None


def matcher_of(entry_name: str) -> tuple[str, str] | None:
    """Split ``[param=matcher]`` into ``(param, matcher)``."""
    match = _MATCHER_RE.search(entry_name)
    if match is None:
        return None
    return match.group(1), match.group(2)


def normalize_segment(name: str) -> str:
    """Reduce a segment to its bare name.

    Rule order: group wrapper, rest, optional, matcher, dynamic.
    ``(admin)`` -> ``admin``, ``[[lang]]`` -> ``lang``, ``[id=integer]`` -> ``id``.
    """
    group = _GROUP_RE.match(name)
    if group is not None:
        return group.group(1)
    name = decode_route_path(name)
    for pattern, _, bare in _PARAM_RULES:
        name = pattern.sub(bare, name)
    return name


def format_route_name(name: str) -> str:
    """Format a single segment for display.

    ``[...path]`` -> ``*path``, ``[[lang]]`` -> ``lang?``,
    ``[id=integer]`` -> ``:id``, ``[slug]`` -> ``:slug``. Groups and
    static names are shown unchanged.
    """
    if _GROUP_RE.match(name):
        return name
    name = decode_route_path(name)
    for pattern, display, _ in _PARAM_RULES:
        name = pattern.sub(display, name)
    return name


def format_route_path(route_path: str) -> str:
    """Format every segment of a slash-separated route path for display."""
    if route_path in ("", "/"):
        return route_path
    return "/".join(format_route_name(segment) for segment in route_path.split("/"))


def route_url_path(route_path: str) -> str:
    """Return the URL path for a route path, without group segments.

    ``(app)/dashboard/(admin)/settings`` -> ``/dashboard/settings``.
    """
    segments = [
        decode_route_path(segment)
        for segment in route_path.split("/")
        if segment and classify(segment) != SegmentKind.GROUP
    ]
    return "/" + "/".join(segments)


def compute_layout_level(route_path: str, reset_target: str) -> int | None:
    """Compute how many ancestor segments a layout reset skips.

    Args:
        route_path: Route path of the directory holding the reset page
        reset_target: Target parsed from the file name (empty = root)

    Returns:
        Number of segments between the page directory and the target,
        the full depth for a root reset, or None when the target is not
        one of the ancestors.
    """
    segments = [segment for segment in route_path.split("/") if segment]
    if not reset_target:
        return len(segments)

    target = normalize_segment(reset_target)
    normalized = [normalize_segment(segment) for segment in segments]
    for index in range(len(normalized) - 1, -1, -1):
        if normalized[index] == target:
            return len(normalized) - 1 - index
    return None
