"""Capability handles over a directory tree.

A handle is a directory, a regular file, or some other entry (symlink,
FIFO, socket, device) that can only be seen, never opened.  Each variant only
exposes the operations that make sense for its kind, so callers branch on
``kind`` once instead of probing a generic handle at every call site.

``LocalDirectory`` / ``LocalFile`` back the handles with the local
filesystem.  Other hosts (archives, remote mounts, test fixtures) plug in by
subclassing the ABCs.
"""

from __future__ import annotations

import logging
import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Literal, Union

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65_536  # 64 KB


@dataclass(frozen=True, slots=True)
class FileStat:
    """Size and modification time of a file."""

    size: int
    mtime: float


class DirectoryHandle(ABC):
    """A directory that can be enumerated and whose children can be removed."""

    kind: Literal["directory"] = "directory"

    @property
    @abstractmethod
    def name(self) -> str:
        """Base name of the directory."""

    @abstractmethod
    def children(self) -> Iterator[Handle]:
        """Yield child handles in a deterministic order.

        Raises ``OSError`` when the directory cannot be listed.
        """

    @abstractmethod
    def remove_entry(self, name: str, *, recursive: bool = False) -> None:
        """Remove the child called *name*.

        Raises ``FileNotFoundError`` when the child is gone and ``OSError``
        for any other failure (permissions, non-empty directory without
        *recursive*).
        """

    def exists(self) -> bool:
        """Whether the directory is still reachable."""
        return True


class FileHandle(ABC):
    """A regular file whose metadata and content can be read."""

    kind: Literal["file"] = "file"

    @property
    @abstractmethod
    def name(self) -> str:
        """Base name of the file."""

    @abstractmethod
    def stat(self) -> FileStat:
        """Return size and modification time. Raises ``OSError``."""

    @abstractmethod
    def read_chunks(self, chunk_size: int = _CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the file content in chunks. Raises ``OSError``."""


class OtherHandle(ABC):
    """An entry that is neither a directory nor a regular file.

    Symbolic links, FIFOs, sockets and device nodes. They are never followed
    or read, but they occupy their directory.
    """

    kind: Literal["other"] = "other"

    @property
    @abstractmethod
    def name(self) -> str:
        """Base name of the entry."""


Handle = Union[DirectoryHandle, FileHandle, OtherHandle]


class LocalDirectory(DirectoryHandle):
    """Directory handle backed by a path on the local filesystem.

    Symbolic links below the directory are reported as ``LocalOther`` and
    never followed, so a walk can not escape the tree it was started on.
    The directory itself may be reached through a link.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalDirectory({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        return self.path.is_dir()

    def children(self) -> Iterator[Handle]:
        with os.scandir(self.path) as it:
            items = sorted(it, key=lambda e: e.name)
        for item in items:
            yield _classify(item)

    def remove_entry(self, name: str, *, recursive: bool = False) -> None:
        target = self.path / name
        if not target.exists() and not target.is_symlink():
            raise FileNotFoundError(f"No such entry: {target}")
        if target.is_dir() and not target.is_symlink():
            if recursive:
                shutil.rmtree(target)
            else:
                target.rmdir()
        else:
            target.unlink()


class LocalFile(FileHandle):
    """File handle backed by a path on the local filesystem."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    def stat(self) -> FileStat:
        st = self.path.stat()
        return FileStat(size=st.st_size, mtime=st.st_mtime)

    def read_chunks(self, chunk_size: int = _CHUNK_SIZE) -> Iterator[bytes]:
        with self.path.open("rb") as f:
            while chunk := f.read(chunk_size):
                yield chunk


class LocalOther(OtherHandle):
    """Symlink or special file on the local filesystem."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalOther({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name


def _classify(item: os.DirEntry) -> Handle:
    try:
        if item.is_symlink():
            log.debug("Not following symlink: %s", item.path)
            return LocalOther(item.path)
        if item.is_dir(follow_symlinks=False):
            return LocalDirectory(item.path)
        if item.is_file(follow_symlinks=False):
            return LocalFile(item.path)
    except OSError:
        log.debug("Cannot determine type of: %s", item.path)
    return LocalOther(item.path)
