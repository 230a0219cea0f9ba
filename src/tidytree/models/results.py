"""Result types returned by the three analyses."""

from __future__ import annotations

from dataclasses import dataclass, field

from tidytree.models.entries import FileEntry, SkippedEntry


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """One attempted removal. ``reason`` is set when ``deleted`` is False."""

    path: str
    deleted: bool
    reason: str | None = None


@dataclass(slots=True)
class PruneReport:
    """Audit trail of an emptiness-pruning run."""

    outcomes: list[DeletionOutcome] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    cancelled: bool = False

    @property
    def deleted(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.deleted]

    @property
    def failed(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if not o.deleted]


@dataclass(slots=True)
class DuplicateGroup:
    """Files sharing one content digest, in discovery order.

    The first file is the suggested copy to keep; nothing else depends on
    which file comes first.
    """

    digest: str
    files: list[FileEntry]
    per_file_size: int

    @property
    def original(self) -> FileEntry:
        return self.files[0]

    @property
    def total_wasted_size(self) -> int:
        return self.per_file_size * (len(self.files) - 1)


@dataclass(slots=True)
class DuplicateScan:
    """Groups found by a duplicate scan, ranked by wasted space."""

    groups: list[DuplicateGroup] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    files_scanned: int = 0
    cancelled: bool = False

    @property
    def total_wasted_size(self) -> int:
        return sum(g.total_wasted_size for g in self.groups)

    @property
    def duplicate_count(self) -> int:
        """Number of redundant copies (every file beyond the first per group)."""
        return sum(len(g.files) - 1 for g in self.groups)


@dataclass(frozen=True, slots=True)
class CategorizedFile:
    """A file together with every junk category it matched."""

    entry: FileEntry
    categories: frozenset[str]

    @property
    def path(self) -> str:
        return self.entry.path

    @property
    def size(self) -> int:
        return self.entry.size


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Per-category totals folded over all categorized files."""

    id: str
    label: str
    description: str
    count: int = 0
    size: int = 0


@dataclass(slots=True)
class JunkScan:
    """Files tagged with at least one junk category."""

    files: list[CategorizedFile] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    files_scanned: int = 0
    cancelled: bool = False

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def matched_categories(self) -> set[str]:
        """Every category id that matched at least one file."""
        matched: set[str] = set()
        for f in self.files:
            matched |= f.categories
        return matched

    def eligible(self, selected: set[str] | frozenset[str]) -> list[CategorizedFile]:
        """Files matching at least one selected category, each listed once."""
        if not selected:
            return []
        return [f for f in self.files if f.categories & selected]


@dataclass(slots=True)
class CleanReport:
    """Outcome of deleting a selection, plus what is left on disk."""

    outcomes: list[DeletionOutcome] = field(default_factory=list)
    freed_bytes: int = 0
    remaining: DuplicateScan | JunkScan | None = None

    @property
    def deleted_count(self) -> int:
        return sum(1 for o in self.outcomes if o.deleted)

    @property
    def errors(self) -> list[str]:
        return [f"{o.path}: {o.reason}" for o in self.outcomes if not o.deleted]
