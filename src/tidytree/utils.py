"""Shared utility functions."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable

from tidytree.models.entries import FileEntry, ScanProgress
from tidytree.models.results import DeletionOutcome

log = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def describe_os_error(exc: OSError) -> str:
    """Short description of an OS error for outcome records."""
    if isinstance(exc, PermissionError):
        return "permission denied"
    if isinstance(exc, FileNotFoundError):
        return "not found"
    return exc.strerror or str(exc) or type(exc).__name__


def remove_files(
    files: Iterable[FileEntry],
    *,
    on_progress: ProgressCallback | None = None,
    interval: int = 1,
) -> tuple[list[DeletionOutcome], int, set[str]]:
    """Remove files through their parent handles.

    Every file gets its own outcome; one failure never stops the rest.
    A file that is already gone counts as a failed removal with reason
    ``"not found"`` but is reported in *gone* so callers drop it from what
    they still show as present.

    Returns:
        (outcomes, freed_bytes, gone) where *gone* holds the paths no longer
        on disk.
    """
    files = list(files)
    total = len(files)
    outcomes: list[DeletionOutcome] = []
    gone: set[str] = set()
    freed = 0

    for i, entry in enumerate(files, 1):
        if entry.parent is None:
            outcomes.append(DeletionOutcome(path=entry.path, deleted=False, reason="no parent handle"))
        else:
            try:
                entry.parent.remove_entry(entry.name)
                outcomes.append(DeletionOutcome(path=entry.path, deleted=True))
                gone.add(entry.path)
                freed += entry.size
                log.debug("Removed %s", entry.path)
            except FileNotFoundError:
                log.info("Already gone: %s", entry.path)
                outcomes.append(DeletionOutcome(path=entry.path, deleted=False, reason="not found"))
                gone.add(entry.path)
            except OSError as e:
                log.warning("Cannot remove %s: %s", entry.path, e)
                outcomes.append(DeletionOutcome(path=entry.path, deleted=False, reason=describe_os_error(e)))

        if on_progress and (i % max(interval, 1) == 0 or i == total):
            on_progress(ScanProgress(current=i, total=total, status=f"Removing {i}/{total} files"))

    return outcomes, freed, gone


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
