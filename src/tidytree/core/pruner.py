"""Bottom-up removal of directories that hold no files."""

from __future__ import annotations

import logging
from enum import Enum

from tidytree.core.cancel import CancelToken
from tidytree.core.errors import ScanCancelled
from tidytree.core.handles import DirectoryHandle
from tidytree.core.walker import TreeWalker, Visitor
from tidytree.models.entries import DirectoryEntry, FileEntry, ScanProgress
from tidytree.models.results import DeletionOutcome, PruneReport
from tidytree.utils import ProgressCallback, describe_os_error

log = logging.getLogger(__name__)


class NodeState(str, Enum):
    """Resolution state of a directory during a prune."""

    UNVISITED = "unvisited"
    VISITING = "visiting"
    HAS_CONTENT = "has_content"
    EMPTY = "empty"


class EmptinessPruner(Visitor[bool]):
    """Resolves every directory after its children and removes the empty ones.

    A directory has content when it holds a file, symlink or special file
    directly, or any child directory has content.  Each removal attempt
    produces exactly one ``DeletionOutcome``; a failed removal does not turn
    the directory into one with content, so its parent can still be removed
    as a whole.

    The root is never removed: it has no parent to remove it through.
    """

    def __init__(
        self,
        *,
        on_progress: ProgressCallback | None = None,
        interval: int = 20,
        total: int = 0,
    ) -> None:
        self.on_progress = on_progress
        self.interval = max(interval, 1)
        self.total = total
        self.outcomes: list[DeletionOutcome] = []
        self.states: dict[str, NodeState] = {}
        self.resolved: list[str] = []

    def state_of(self, path: str) -> NodeState:
        return self.states.get(path, NodeState.UNVISITED)

    def enter_directory(self, entry: DirectoryEntry) -> None:
        self.states[entry.path] = NodeState.VISITING

    def visit_file(self, entry: FileEntry) -> bool:
        return True

    def unreadable_file(self, path: str, reason: str) -> bool:
        # The file exists even if its metadata can't be read.
        return True

    def other_entry(self, path: str) -> bool:
        # Symlinks and special files occupy the directory too.
        return True

    def exit_directory(self, entry: DirectoryEntry, results: list[bool], error: str | None) -> bool:
        if error is not None:
            # Emptiness can't be proven for a directory we could not list.
            has_content = True
        else:
            has_content = any(results)

        state = NodeState.HAS_CONTENT if has_content else NodeState.EMPTY
        self.states[entry.path] = state
        self.resolved.append(entry.path)

        if state is NodeState.EMPTY and entry.parent is not None:
            self.outcomes.append(self._remove(entry.parent, entry))

        self._report(entry)
        return has_content

    def _remove(self, parent: DirectoryHandle, entry: DirectoryEntry) -> DeletionOutcome:
        try:
            parent.remove_entry(entry.name, recursive=True)
        except OSError as e:
            log.warning("Cannot remove empty directory %s: %s", entry.path, e)
            return DeletionOutcome(path=entry.path, deleted=False, reason=describe_os_error(e))
        log.info("Removed empty directory %s", entry.path)
        return DeletionOutcome(path=entry.path, deleted=True)

    def _report(self, entry: DirectoryEntry) -> None:
        if self.on_progress is None or entry.is_root:
            return
        current = len(self.resolved)
        if current % self.interval == 0 or current == self.total:
            self.on_progress(ScanProgress(current=current, total=self.total, status=f"Checked {entry.path}"))


def prune_empty_dirs(
    root: DirectoryHandle,
    *,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    precount: bool = True,
    interval: int = 20,
) -> PruneReport:
    """Remove every directory below *root* that has no file in its subtree.

    Args:
        root: Directory to prune. It is never removed itself.
        on_progress: Optional callback for progress updates.
        cancel: Optional token; when set the run stops and the report is
            marked ``cancelled`` with the removals done so far.
        precount: Walk the tree once first to know the number of directories.
        interval: Directories between progress callbacks.
    """
    walker = TreeWalker(cancel)
    report = PruneReport()

    try:
        total = walker.count(root)[1] if precount else 0
        pruner = EmptinessPruner(on_progress=on_progress, interval=interval, total=total)
        try:
            walker.visit(root, pruner)
        finally:
            report.outcomes = pruner.outcomes
    except ScanCancelled:
        log.info("Prune cancelled")
        report.cancelled = True

    report.skipped = walker.skipped
    log.info(
        "Prune finished: %d removed, %d failed, %d skipped",
        len(report.deleted),
        len(report.failed),
        len(report.skipped),
    )
    return report
