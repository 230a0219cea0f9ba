"""Depth-first traversal over directory handles.

Two ways to walk a tree:

* ``TreeWalker.walk()`` lazily yields every ``DirectoryEntry`` and
  ``FileEntry`` in pre-order.
* ``TreeWalker.visit()`` drives a ``Visitor``.  Each node returns a value to
  its parent directory, which sees all child values before it resolves.

Entries that cannot be listed or stat'ed are recorded in
``TreeWalker.skipped`` and the walk carries on with their siblings.
Symlinks and special files are only shown to visitors, never followed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

from tidytree.core.cancel import CancelToken, check
from tidytree.core.errors import RootUnavailableError
from tidytree.core.handles import DirectoryHandle, FileHandle, Handle
from tidytree.models.entries import DirectoryEntry, FileEntry, SkippedEntry, join_path
from tidytree.utils import describe_os_error

log = logging.getLogger(__name__)

T = TypeVar("T")


def require_root(root: DirectoryHandle | None) -> DirectoryHandle:
    """Return *root* if it is a usable directory handle, else raise."""
    if root is None or getattr(root, "kind", None) != "directory":
        raise RootUnavailableError("Scan root is not a directory")
    try:
        reachable = root.exists()
    except OSError as e:
        raise RootUnavailableError(f"Scan root is unavailable: {e}") from e
    if not reachable:
        raise RootUnavailableError(f"Scan root does not exist: {root.name}")
    return root


class Visitor(ABC, Generic[T]):
    """Callbacks driven by ``TreeWalker.visit()``.

    Subclasses implement ``visit_file`` and ``exit_directory``; the other
    hooks are optional.
    """

    def enter_directory(self, entry: DirectoryEntry) -> None:
        """Called before any child of *entry* is visited."""

    @abstractmethod
    def visit_file(self, entry: FileEntry) -> T:
        """Called for every regular file whose metadata could be read."""

    def unreadable_file(self, path: str, reason: str) -> T | None:
        """Called for a file whose metadata could not be read.

        Return ``None`` to leave it out of the parent's child results.
        """
        return None

    def other_entry(self, path: str) -> T | None:
        """Called for a symlink or special file. Links are never followed.

        Return ``None`` to leave it out of the parent's child results.
        """
        return None

    @abstractmethod
    def exit_directory(self, entry: DirectoryEntry, results: list[T], error: str | None) -> T:
        """Called after every child of *entry* resolved.

        *error* is set when the directory could not be listed, in which case
        *results* is empty.
        """


class TreeWalker:
    """Sequential depth-first walker with per-entry failure isolation."""

    def __init__(self, cancel: CancelToken | None = None) -> None:
        self.cancel = cancel
        self.skipped: list[SkippedEntry] = []

    def walk(self, root: DirectoryHandle) -> Iterator[DirectoryEntry | FileEntry]:
        """Yield the root and everything below it in pre-order."""
        require_root(root)
        yield from self._walk(DirectoryEntry(path="", name=root.name, handle=root))

    def files(self, root: DirectoryHandle) -> Iterator[FileEntry]:
        """Yield every file below *root* in discovery order."""
        for entry in self.walk(root):
            if isinstance(entry, FileEntry):
                yield entry

    def count(self, root: DirectoryHandle) -> tuple[int, int]:
        """Count (files, directories) below *root*, the root excluded.

        This is a full extra traversal; directory sizes are not known
        up front.  Failures are not recorded in ``skipped``.
        """
        files = dirs = 0
        counter = TreeWalker(self.cancel)
        for entry in counter.walk(root):
            if isinstance(entry, FileEntry):
                files += 1
            elif not entry.is_root:
                dirs += 1
        return files, dirs

    def visit(self, root: DirectoryHandle, visitor: Visitor[T]) -> T:
        """Drive *visitor* over the tree and return the root's result."""
        require_root(root)
        return self._visit(DirectoryEntry(path="", name=root.name, handle=root), visitor)

    # ── internals ────────────────────────────────────────────────────────

    def _list(self, entry: DirectoryEntry) -> tuple[list[Handle], str | None]:
        try:
            return list(entry.handle.children()), None
        except OSError as e:
            log.warning("Cannot list %s: %s", entry.path or entry.name, e)
            reason = describe_os_error(e)
            self.skipped.append(SkippedEntry(path=entry.path, reason=reason))
            return [], reason

    def _file_entry(self, parent: DirectoryEntry, handle: FileHandle) -> FileEntry | None:
        path = join_path(parent.path, handle.name)
        try:
            st = handle.stat()
        except OSError as e:
            log.debug("Cannot stat %s: %s", path, e)
            self.skipped.append(SkippedEntry(path=path, reason=describe_os_error(e)))
            return None
        return FileEntry(
            path=path,
            name=handle.name,
            size=st.size,
            last_modified=st.mtime,
            parent=parent.handle,
            handle=handle,
        )

    def _walk(self, entry: DirectoryEntry) -> Iterator[DirectoryEntry | FileEntry]:
        check(self.cancel)
        yield entry
        children, _ = self._list(entry)
        for child in children:
            check(self.cancel)
            if child.kind == "file":
                file_entry = self._file_entry(entry, child)
                if file_entry is not None:
                    yield file_entry
            elif child.kind == "directory":
                yield from self._walk(_subdirectory(entry, child))

    def _visit(self, entry: DirectoryEntry, visitor: Visitor[T]) -> T:
        check(self.cancel)
        visitor.enter_directory(entry)
        children, error = self._list(entry)
        if error is not None:
            return visitor.exit_directory(entry, [], error)

        results: list[T] = []
        for child in children:
            check(self.cancel)
            if child.kind == "file":
                file_entry = self._file_entry(entry, child)
                if file_entry is None:
                    result = visitor.unreadable_file(join_path(entry.path, child.name), "cannot stat file")
                    if result is not None:
                        results.append(result)
                else:
                    results.append(visitor.visit_file(file_entry))
            elif child.kind == "directory":
                results.append(self._visit(_subdirectory(entry, child), visitor))
            else:
                result = visitor.other_entry(join_path(entry.path, child.name))
                if result is not None:
                    results.append(result)
        return visitor.exit_directory(entry, results, None)


def _subdirectory(parent: DirectoryEntry, handle: DirectoryHandle) -> DirectoryEntry:
    return DirectoryEntry(
        path=join_path(parent.path, handle.name),
        name=handle.name,
        handle=handle,
        parent=parent.handle,
    )

