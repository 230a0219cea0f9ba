"""Entries produced while walking a tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tidytree.core.handles import DirectoryHandle, FileHandle


def join_path(base: str, name: str) -> str:
    """Join a root-relative path and a child name with ``/``."""
    return f"{base}/{name}" if base else name


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file discovered during a walk.

    ``path`` is relative to the scan root, segments joined by ``/``.
    ``parent`` is the handle the file is removed through.
    """

    path: str
    name: str
    size: int
    last_modified: float
    parent: DirectoryHandle | None = field(default=None, repr=False, compare=False)
    handle: FileHandle | None = field(default=None, repr=False, compare=False)

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or ``""``."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A directory discovered during a walk. The root has ``parent=None``."""

    path: str
    name: str
    handle: DirectoryHandle = field(repr=False, compare=False)
    parent: DirectoryHandle | None = field(default=None, repr=False, compare=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """An entry that could not be listed, stat'ed or read."""

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Progress of a long pass. ``total`` is 0 when unknown."""

    current: int
    total: int
    status: str = ""

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(self.current / self.total, 1.0)
