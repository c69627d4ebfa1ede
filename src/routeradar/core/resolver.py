"""Resolve URL paths against a routes directory.

Walks the routes tree one directory per path segment and scores every
candidate that can consume the current segment. Exact names and
satisfied matchers are tried first; groups, parameters and rest
segments are only considered when that pass finds nothing. The highest
scoring successful candidate at each level wins.

Nothing is cached: every call lists the directories again.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from routeradar.core import matchers
from routeradar.core.fs import FileSystem, LocalFileSystem
from routeradar.core.segments import classify, decode_route_path, is_reset_page, matcher_of
from routeradar.core.sorting import sort_entries
from routeradar.core.types import SegmentKind

logger = logging.getLogger(__name__)

SCORE_STATIC = 100
SCORE_GROUP = 95
SCORE_MATCHER = 90
SCORE_DYNAMIC = 80
SCORE_OPTIONAL = 70
SCORE_OPTIONAL_SKIPPED = 60
SCORE_REST = 50


@dataclass(frozen=True)
class MatchCandidate:
    """Successful match of one candidate directory."""

    matched_file_path: Path
    score: int


def split_request_path(request_path: str) -> list[str]:
    """Split a URL or path into its non-empty, decoded segments.

    Full URLs keep only their path component. Query strings and
    fragments are dropped, repeated slashes collapse.

    Examples:
        >>> split_request_path("http://localhost:5173/blog//post/?page=2")
        ['blog', 'post']
        >>> split_request_path("/")
        []
    """
    if "://" in request_path:
        path = urlsplit(request_path).path
    else:
        path = request_path.split("#", 1)[0].split("?", 1)[0]
    return [unquote(segment) for segment in path.split("/") if segment]


class RouteResolver:
    """Finds the terminal route file for a URL path."""

    def __init__(self, fs: FileSystem | None = None) -> None:
        self._fs = fs or LocalFileSystem()

    def resolve(self, routes_dir: Path, request_path: str) -> Path | None:
        """Resolve a URL or path to the best matching route file.

        Args:
            routes_dir: Root routes directory
            request_path: Raw URL (``http://host/a/b``) or path (``/a/b``, ``a/b``)

        Returns:
            Path of the matching page or endpoint file, None if no route matches
            or the routes directory cannot be read
        """
        segments = split_request_path(request_path)
        try:
            if not segments:
                return self.find_most_specific_page(routes_dir)
            return self._match(routes_dir, segments)
        except OSError as e:
            logger.warning(f"Cannot read routes directory {routes_dir}: {e}")
            return None

    def find_most_specific_page(self, directory: Path) -> Path | None:
        """Return the terminal file of a directory.

        Priority: reset page with a named target, root reset page,
        server endpoint, plain page.
        """
        if not self._fs.exists(directory):
            return None
        names = sorted(entry.name for entry in self._fs.list_entries(directory) if not entry.is_dir)

        for name in names:
            if is_reset_page(name) and name != "+page@.svelte":
                return directory / name
        for candidate in ("+page@.svelte", "+server.js", "+server.ts", "+page.svelte"):
            if candidate in names:
                return directory / candidate
        return None

    def _subdirectories(self, directory: Path) -> list[tuple[str, SegmentKind]]:
        names = [
            entry.name
            for entry in self._fs.list_entries(directory)
            if entry.is_dir and not entry.name.startswith(".")
        ]
        return [(name, classify(name)) for name in sort_entries(names)]

    def _match(self, directory: Path, segments: list[str]) -> Path | None:
        subdirs = self._subdirectories(directory)

        if not segments:
            # Optional parameters can match nothing and still be the terminal route
            for name, kind in subdirs:
                if kind == SegmentKind.OPTIONAL:
                    optional_match = self._match(directory / name, [])
                    if optional_match is not None:
                        return optional_match
            return self.find_most_specific_page(directory)

        best = self._best_exact_match(directory, subdirs, segments)
        if best is None:
            best = self._best_fallback_match(directory, subdirs, segments)
        return best.matched_file_path if best is not None else None

    def _best_exact_match(
        self,
        directory: Path,
        subdirs: list[tuple[str, SegmentKind]],
        segments: list[str],
    ) -> MatchCandidate | None:
        """Score static names equal to the segment and satisfied matchers."""
        current, rest = segments[0], segments[1:]
        best: MatchCandidate | None = None

        for name, kind in subdirs:
            if kind == SegmentKind.STATIC and decode_route_path(name) == current:
                best = _better(best, self._match(directory / name, rest), SCORE_STATIC)
            elif kind == SegmentKind.MATCHER and self._matcher_accepts(name, current):
                best = _better(best, self._match(directory / name, rest), SCORE_MATCHER)

        return best

    def _best_fallback_match(
        self,
        directory: Path,
        subdirs: list[tuple[str, SegmentKind]],
        segments: list[str],
    ) -> MatchCandidate | None:
        """Score groups, dynamic, optional and rest parameters."""
        rest = segments[1:]
        best: MatchCandidate | None = None

        for name, kind in subdirs:
            child = directory / name
            if kind == SegmentKind.GROUP:
                best = _better(best, self._match(child, segments), SCORE_GROUP)
            elif kind == SegmentKind.DYNAMIC:
                best = _better(best, self._match(child, rest), SCORE_DYNAMIC)
            elif kind == SegmentKind.OPTIONAL:
                consumed = self._match(child, rest)
                if consumed is not None:
                    best = _better(best, consumed, SCORE_OPTIONAL)
                else:
                    best = _better(best, self._match(child, segments), SCORE_OPTIONAL_SKIPPED)
            elif kind == SegmentKind.REST:
                best = _better(best, self.find_most_specific_page(child), SCORE_REST)

        return best

    def _matcher_accepts(self, entry_name: str, value: str) -> bool:
        parsed = matcher_of(entry_name)
        if parsed is None:
            return False
        _, matcher = parsed
        return matchers.matches(matcher, value)


def _better(best: MatchCandidate | None, match: Path | None, score: int) -> MatchCandidate | None:
    """Keep the higher scoring candidate; earlier candidates win ties."""
    if match is None:
        return best
    if best is None or score > best.score:
        return MatchCandidate(matched_file_path=match, score=score)
    return best


def resolve_route(routes_dir: Path, request_path: str, fs: FileSystem | None = None) -> Path | None:
    """Resolve a URL or path against a routes directory.

    Convenience wrapper around RouteResolver.resolve().
    """
    return RouteResolver(fs).resolve(routes_dir, request_path)
