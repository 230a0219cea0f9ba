"""Base junk-category interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from tidytree.models.entries import FileEntry

log = logging.getLogger(__name__)

ONE_DAY = 86400  # seconds


@dataclass(frozen=True, slots=True)
class MatchContext:
    """Normalized view of a file that category predicates are evaluated on.

    ``path`` and ``name`` are lower-cased; ``path`` is root-relative and
    includes the file name.
    """

    path: str
    name: str
    size: int
    last_modified: float
    now: float

    @classmethod
    def from_entry(cls, entry: FileEntry, now: float) -> MatchContext:
        return cls(
            path=entry.path.lower(),
            name=entry.name.lower(),
            size=entry.size,
            last_modified=entry.last_modified,
            now=now,
        )

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""

    @property
    def directories(self) -> list[str]:
        """Parent directory segments of the path, root first."""
        return self.path.split("/")[:-1]

    @property
    def age(self) -> float:
        """Seconds since the file was last modified."""
        return self.now - self.last_modified

    def path_contains(self, *needles: str) -> bool:
        return any(n in self.path for n in needles)


class JunkCategory(ABC):
    """Base class for the built-in junk categories.

    A category is a fixed, named predicate over a ``MatchContext``.  The
    predicates are independent: a file collects the id of every category
    that matches it.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'temp-system'."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Human-readable name, e.g. 'System Temporary Files'."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What the category catches."""

    @property
    def sort_order(self) -> int:
        """Position in listings and summaries (lower = first)."""
        return 50

    @abstractmethod
    def matches(self, context: MatchContext) -> bool:
        """Whether the file described by *context* belongs to this category."""
