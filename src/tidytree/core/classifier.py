"""Rule-based junk classification."""

from __future__ import annotations

import logging
import time
from typing import Iterable

from tidytree.core.cancel import CancelToken, check
from tidytree.core.category_loader import default_registry
from tidytree.core.errors import ScanCancelled
from tidytree.core.handles import DirectoryHandle
from tidytree.core.registry import CategoryRegistry
from tidytree.core.walker import TreeWalker
from tidytree.models.category import JunkCategory, MatchContext
from tidytree.models.entries import FileEntry, ScanProgress
from tidytree.models.results import CategorizedFile, CategorySummary, CleanReport, JunkScan
from tidytree.utils import ProgressCallback, remove_files

log = logging.getLogger(__name__)


def classify(context: MatchContext, categories: Iterable[JunkCategory]) -> frozenset[str]:
    """Ids of every category matching *context*, not just the first."""
    matched = set()
    for category in categories:
        try:
            if category.matches(context):
                matched.add(category.id)
        except Exception:
            log.exception("Category '%s' failed on %s", category.id, context.path)
    return frozenset(matched)


def classify_entry(entry: FileEntry, categories: Iterable[JunkCategory], now: float | None = None) -> frozenset[str]:
    return classify(MatchContext.from_entry(entry, time.time() if now is None else now), categories)


def scan_junk(
    root: DirectoryHandle,
    *,
    registry: CategoryRegistry | None = None,
    now: float | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    interval: int = 20,
) -> JunkScan:
    """Tag every file below *root* with the junk categories it matches.

    Files matching no category are left out of the result.  The clock is read
    once, so every file's age is measured against the same instant.

    Args:
        root: Directory to scan.
        registry: Categories to evaluate; the built-in set by default.
        now: POSIX timestamp to measure file ages against.
        on_progress: Optional callback for progress updates.
        cancel: Optional token; when set the scan stops and returns the files
            classified so far with ``cancelled`` set.
        interval: Files between progress callbacks.
    """
    categories = (registry if registry is not None else default_registry()).get_all()
    now = time.time() if now is None else now
    interval = max(interval, 1)
    walker = TreeWalker(cancel)
    scan = JunkScan()

    try:
        files = list(walker.files(root))
        scan.files_scanned = len(files)
        total = len(files)

        for i, entry in enumerate(files, 1):
            check(cancel)
            matched = classify_entry(entry, categories, now)
            if matched:
                scan.files.append(CategorizedFile(entry=entry, categories=matched))
            if on_progress and (i % interval == 0 or i == total):
                on_progress(ScanProgress(current=i, total=total, status=f"Analyzing {i}/{total} files"))
    except ScanCancelled:
        log.info("Junk scan cancelled")
        scan.cancelled = True

    scan.skipped = walker.skipped
    log.info("Junk scan finished: %d of %d files matched", len(scan.files), scan.files_scanned)
    return scan


def summarize(scan: JunkScan, registry: CategoryRegistry | None = None) -> list[CategorySummary]:
    """Count and total size per category, every category included.

    A file matching several categories counts once in each of them.
    """
    registry = registry if registry is not None else default_registry()
    counts: dict[str, int] = {cid: 0 for cid in registry.ids()}
    sizes: dict[str, int] = dict(counts)
    for f in scan.files:
        for cid in f.categories:
            if cid in counts:
                counts[cid] += 1
                sizes[cid] += f.size
    return [
        CategorySummary(
            id=c.id,
            label=c.label,
            description=c.description,
            count=counts[c.id],
            size=sizes[c.id],
        )
        for c in registry.get_all()
    ]


def default_selection(scan: JunkScan) -> set[str]:
    """Categories selected right after a scan: all that matched something."""
    return scan.matched_categories


def clean_junk(
    scan: JunkScan,
    selected: set[str] | frozenset[str],
    *,
    on_progress: ProgressCallback | None = None,
    interval: int = 1,
) -> CleanReport:
    """Remove the union of files matching any selected category.

    A file matching two selected categories is removed once.  Files that
    fail to be removed stay in ``report.remaining``.
    """
    targets = scan.eligible(selected)
    outcomes, freed, gone = remove_files(targets, on_progress=on_progress, interval=interval)
    remaining = JunkScan(
        files=[f for f in scan.files if f.path not in gone],
        skipped=list(scan.skipped),
        files_scanned=scan.files_scanned,
        cancelled=scan.cancelled,
    )
    log.info(
        "Removed %d of %d junk files (%d bytes)", sum(1 for o in outcomes if o.deleted), len(targets), freed
    )
    return CleanReport(outcomes=outcomes, freed_bytes=freed, remaining=remaining)
