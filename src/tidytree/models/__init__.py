"""Tidytree data models."""

from tidytree.models.category import JunkCategory, MatchContext
from tidytree.models.entries import DirectoryEntry, FileEntry, ScanProgress, SkippedEntry
from tidytree.models.results import (
    CategorizedFile,
    CategorySummary,
    CleanReport,
    DeletionOutcome,
    DuplicateGroup,
    DuplicateScan,
    JunkScan,
    PruneReport,
)

__all__ = [
    "CategorizedFile",
    "CategorySummary",
    "CleanReport",
    "DeletionOutcome",
    "DirectoryEntry",
    "DuplicateGroup",
    "DuplicateScan",
    "FileEntry",
    "JunkCategory",
    "JunkScan",
    "MatchContext",
    "PruneReport",
    "ScanProgress",
    "SkippedEntry",
]
