"""Analysis orchestration engine."""

from __future__ import annotations

import logging
from pathlib import Path

from tidytree.core.cancel import CancelToken
from tidytree.core.category_loader import default_registry
from tidytree.core.classifier import clean_junk, default_selection, scan_junk, summarize
from tidytree.core.duplicates import delete_duplicates, find_duplicates, select_all_but_first
from tidytree.core.errors import TidyError
from tidytree.core.handles import DirectoryHandle, LocalDirectory
from tidytree.core.pruner import prune_empty_dirs
from tidytree.core.registry import CategoryRegistry
from tidytree.core.walker import require_root
from tidytree.models.results import (
    CategorizedFile,
    CategorySummary,
    CleanReport,
    DuplicateScan,
    JunkScan,
    PruneReport,
)
from tidytree.settings import Settings
from tidytree.utils import ProgressCallback

log = logging.getLogger(__name__)


def as_root(root: DirectoryHandle | Path | str) -> DirectoryHandle:
    """Accept a handle or a local path and return a checked directory handle."""
    if isinstance(root, (str, Path)):
        root = LocalDirectory(Path(root).expanduser())
    return require_root(root)


class TidyEngine:
    """Runs one analysis at a time and keeps its result for the delete step.

    Scanning never deletes anything.  Deleting works on the last result of
    the matching scan and replaces it with what is left on disk.
    """

    def __init__(self, registry: CategoryRegistry | None = None, settings: Settings | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings if settings is not None else Settings.instance()
        self._last_duplicates: DuplicateScan | None = None
        self._last_junk: JunkScan | None = None
        self.selected_categories: set[str] = set()

    @property
    def _interval(self) -> int:
        return self.settings.get_int("progress.interval")

    # ── empty folders ────────────────────────────────────────────────────

    def prune(
        self,
        root: DirectoryHandle | Path | str,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> PruneReport:
        """Remove every empty directory below *root*."""
        handle = as_root(root)
        log.info("Pruning empty directories below %s", handle.name)
        return prune_empty_dirs(
            handle,
            on_progress=on_progress,
            cancel=cancel,
            precount=bool(self.settings.get("prune.precount", True)),
            interval=self._interval,
        )

    # ── duplicates ───────────────────────────────────────────────────────

    def find_duplicates(
        self,
        root: DirectoryHandle | Path | str,
        file_type: str | None = None,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> DuplicateScan:
        """Scan for duplicate files (preview only, never deletes)."""
        handle = as_root(root)
        file_type = file_type or self.settings.get("duplicates.file_type", "all")
        log.info("Looking for duplicate %s files below %s", file_type, handle.name)
        scan = find_duplicates(
            handle,
            file_type,
            on_progress=on_progress,
            cancel=cancel,
            chunk_size=self.settings.get_int("duplicates.chunk_size"),
            interval=self._interval,
        )
        self._last_duplicates = scan
        return scan

    @property
    def last_duplicates(self) -> DuplicateScan | None:
        return self._last_duplicates

    def suggest_duplicate_selection(self) -> set[str]:
        """Every copy but the first of each group in the last scan."""
        if self._last_duplicates is None:
            return set()
        return select_all_but_first(self._last_duplicates.groups)

    def delete_duplicates(self, paths: set[str], on_progress: ProgressCallback | None = None) -> CleanReport:
        """Remove the selected files from the last duplicate scan."""
        if self._last_duplicates is None:
            raise TidyError("No duplicate scan to delete from")
        report = delete_duplicates(self._last_duplicates, paths, on_progress=on_progress)
        self._last_duplicates = report.remaining
        return report

    # ── junk ─────────────────────────────────────────────────────────────

    def scan_junk(
        self,
        root: DirectoryHandle | Path | str,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
        now: float | None = None,
    ) -> JunkScan:
        """Classify files below *root* (preview only, never deletes).

        Every category that matched a file starts out selected.
        """
        handle = as_root(root)
        log.info("Looking for junk files below %s", handle.name)
        scan = scan_junk(
            handle,
            registry=self.registry,
            now=now,
            on_progress=on_progress,
            cancel=cancel,
            interval=self._interval,
        )
        self._last_junk = scan
        self.selected_categories = default_selection(scan)
        return scan

    @property
    def last_junk(self) -> JunkScan | None:
        return self._last_junk

    def toggle_category(self, category_id: str) -> bool:
        """Flip selection of a category. Returns whether it is now selected."""
        if category_id not in self.registry:
            raise TidyError(f"Unknown category: {category_id}")
        if category_id in self.selected_categories:
            self.selected_categories.discard(category_id)
            return False
        self.selected_categories.add(category_id)
        return True

    def junk_summaries(self) -> list[CategorySummary]:
        return summarize(self._last_junk or JunkScan(), self.registry)

    def eligible_junk(self) -> list[CategorizedFile]:
        """Files that a clean would remove with the current selection."""
        if self._last_junk is None:
            return []
        return self._last_junk.eligible(self.selected_categories)

    def clean_junk(
        self,
        selected: set[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> CleanReport:
        """Remove every file of the last junk scan matching a selected category.

        Afterwards the selection holds the categories still matched by the
        files that remain.
        """
        if self._last_junk is None:
            raise TidyError("No junk scan to clean")
        if selected is not None:
            unknown = selected - set(self.registry.ids())
            if unknown:
                raise TidyError(f"Unknown categories: {', '.join(sorted(unknown))}")
            self.selected_categories = set(selected)
        report = clean_junk(self._last_junk, self.selected_categories, on_progress=on_progress)
        self._last_junk = report.remaining
        self.selected_categories = report.remaining.matched_categories
        return report
