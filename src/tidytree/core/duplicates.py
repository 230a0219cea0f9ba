"""Content-addressed duplicate detection."""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable

from tidytree.core.cancel import CancelToken, check
from tidytree.core.errors import ScanCancelled
from tidytree.core.handles import DirectoryHandle
from tidytree.core.walker import TreeWalker
from tidytree.models.entries import FileEntry, ScanProgress, SkippedEntry
from tidytree.models.results import CleanReport, DuplicateGroup, DuplicateScan
from tidytree.utils import ProgressCallback, describe_os_error, remove_files

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65_536  # 64 KB

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "ico", "heic", "heif"})
VIDEO_EXTENSIONS = frozenset({"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm", "mpeg", "mpg", "3gp", "m4v"})
DOCUMENT_EXTENSIONS = frozenset(
    {"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "rtf", "odt", "ods", "odp"}
)

FILE_TYPES = ("all", "images", "videos", "documents", "others")


def file_type_of(name: str) -> str:
    """Classify a file name as images, videos, documents or others."""
    _, dot, ext = name.rpartition(".")
    ext = ext.lower() if dot else ""
    if ext in IMAGE_EXTENSIONS:
        return "images"
    if ext in VIDEO_EXTENSIONS:
        return "videos"
    if ext in DOCUMENT_EXTENSIONS:
        return "documents"
    return "others"


def hash_file(entry: FileEntry, chunk_size: int = _CHUNK_SIZE, cancel: CancelToken | None = None) -> str:
    """Compute SHA-256 of a file using chunked reads."""
    if entry.handle is None:
        raise OSError(f"No file handle for {entry.path}")
    h = hashlib.sha256()
    for chunk in entry.handle.read_chunks(chunk_size):
        check(cancel)
        h.update(chunk)
    return h.hexdigest()


def rank_groups(groups: Iterable[DuplicateGroup]) -> list[DuplicateGroup]:
    """Sort groups by wasted space, largest first. Ties keep discovery order."""
    return sorted(groups, key=lambda g: g.total_wasted_size, reverse=True)


def find_duplicates(
    root: DirectoryHandle,
    file_type: str = "all",
    *,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    chunk_size: int = _CHUNK_SIZE,
    interval: int = 20,
) -> DuplicateScan:
    """Find files below *root* with identical content.

    Files are collected in discovery order, filtered by *file_type*, bucketed
    by size, and every file sharing its size with another is hashed.  Files
    that can't be read are reported in ``skipped``.

    Args:
        root: Directory to scan.
        file_type: One of ``FILE_TYPES``.
        on_progress: Optional callback for progress updates.
        cancel: Optional token; when set the scan stops and returns the groups
            found so far with ``cancelled`` set.
        chunk_size: Bytes per read while hashing.
        interval: Files between progress callbacks.
    """
    if file_type not in FILE_TYPES:
        raise ValueError(f"Unknown file type: {file_type!r} (expected one of {', '.join(FILE_TYPES)})")

    interval = max(interval, 1)
    walker = TreeWalker(cancel)
    scan = DuplicateScan()
    by_digest: dict[str, list[FileEntry]] = {}

    try:
        files = _collect(walker, root, file_type, on_progress, interval)
        scan.files_scanned = len(files)

        by_size: dict[int, list[FileEntry]] = {}
        for entry in files:
            by_size.setdefault(entry.size, []).append(entry)
        candidates = [e for e in files if len(by_size[e.size]) > 1]
        log.debug("%d of %d files share a size with another file", len(candidates), len(files))

        total = len(candidates)
        for i, entry in enumerate(candidates, 1):
            check(cancel)
            try:
                digest = hash_file(entry, chunk_size, cancel)
                by_digest.setdefault(digest, []).append(entry)
            except OSError as e:
                log.debug("Cannot hash %s: %s", entry.path, e)
                scan.skipped.append(SkippedEntry(path=entry.path, reason=describe_os_error(e)))

            if on_progress and (i % interval == 0 or i == total):
                on_progress(ScanProgress(current=i, total=total, status=f"Hashing {i}/{total} files"))
    except ScanCancelled:
        log.info("Duplicate scan cancelled")
        scan.cancelled = True

    scan.skipped = walker.skipped + scan.skipped
    scan.groups = rank_groups(
        DuplicateGroup(digest=digest, files=members, per_file_size=members[0].size)
        for digest, members in by_digest.items()
        if len(members) > 1
    )
    log.info(
        "Duplicate scan finished: %d groups, %d redundant copies, %d bytes wasted",
        len(scan.groups),
        scan.duplicate_count,
        scan.total_wasted_size,
    )
    return scan


def _collect(
    walker: TreeWalker,
    root: DirectoryHandle,
    file_type: str,
    on_progress: ProgressCallback | None,
    interval: int,
) -> list[FileEntry]:
    files: list[FileEntry] = []
    for entry in walker.files(root):
        if file_type == "all" or file_type_of(entry.name) == file_type:
            files.append(entry)
            if on_progress and len(files) % interval == 0:
                on_progress(ScanProgress(current=len(files), total=0, status=f"Found {len(files)} files"))
    return files


def select_all_but_first(groups: Iterable[DuplicateGroup]) -> set[str]:
    """Paths of every file except the first one of each group."""
    return {f.path for g in groups for f in g.files[1:]}


def total_wasted_size(groups: Iterable[DuplicateGroup]) -> int:
    """Bytes freed by keeping one copy of every group."""
    return sum(g.total_wasted_size for g in groups)


def selected_size(groups: Iterable[DuplicateGroup], paths: set[str]) -> int:
    """Total size of the selected files."""
    return sum(f.size for g in groups for f in g.files if f.path in paths)


def drop_paths(scan: DuplicateScan, gone: set[str]) -> DuplicateScan:
    """Return *scan* without the files in *gone*.

    Groups left with fewer than two files are no longer duplicates and are
    dropped; the rest are re-ranked.
    """
    groups = []
    for group in scan.groups:
        files = [f for f in group.files if f.path not in gone]
        if len(files) > 1:
            groups.append(DuplicateGroup(digest=group.digest, files=files, per_file_size=group.per_file_size))
    return DuplicateScan(
        groups=rank_groups(groups),
        skipped=list(scan.skipped),
        files_scanned=scan.files_scanned,
        cancelled=scan.cancelled,
    )


def delete_duplicates(
    scan: DuplicateScan,
    paths: set[str],
    *,
    on_progress: ProgressCallback | None = None,
    interval: int = 1,
) -> CleanReport:
    """Remove the selected files and report each removal independently.

    Selection is per file, not per group: nothing stops a caller from
    selecting every copy in a group.  Files that fail to be removed stay in
    ``report.remaining``.
    """
    targets = [f for g in scan.groups for f in g.files if f.path in paths]
    unknown = paths - {f.path for f in targets}
    if unknown:
        log.warning("Ignoring %d selected paths not in the scan result", len(unknown))

    outcomes, freed, gone = remove_files(targets, on_progress=on_progress, interval=interval)
    return CleanReport(outcomes=outcomes, freed_bytes=freed, remaining=drop_paths(scan, gone))
