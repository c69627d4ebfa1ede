"""Directory listing used by the resolver and tree builder.

The core only needs to list a directory and check that a path exists,
so both are behind a small protocol that tests can replace.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class DirEntry:
    """Directory entry name and type."""

    name: str
    is_dir: bool


class FileSystem(Protocol):
    """Protocol for directory listing capability."""

    def list_entries(self, directory: Path) -> list[DirEntry]: ...

    def exists(self, path: Path) -> bool: ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    list_entries raises OSError for missing or unreadable directories;
    callers decide how to report it. Symlinked directories are listed as
    plain entries and never descended into.
    """

    def list_entries(self, directory: Path) -> list[DirEntry]:
        with os.scandir(directory) as it:
            return [
                DirEntry(name=entry.name, is_dir=entry.is_dir(follow_symlinks=False))
                for entry in it
            ]

    def exists(self, path: Path) -> bool:
        return path.exists()
