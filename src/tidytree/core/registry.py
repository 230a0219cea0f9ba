"""Central junk-category registry."""

from __future__ import annotations

import logging
from typing import Iterator

from tidytree.models.category import JunkCategory

log = logging.getLogger(__name__)


class CategoryRegistry:
    """Stores and retrieves registered junk categories."""

    def __init__(self) -> None:
        self._categories: dict[str, JunkCategory] = {}

    def register(self, category: JunkCategory) -> None:
        """Register a category instance."""
        if category.id in self._categories:
            log.warning("Category '%s' already registered, skipping duplicate", category.id)
            return
        self._categories[category.id] = category
        log.debug("Registered category: %s (%s)", category.id, category.label)

    def get(self, category_id: str) -> JunkCategory | None:
        """Get a category by its ID."""
        return self._categories.get(category_id)

    def get_all(self) -> list[JunkCategory]:
        """Get all categories in display order."""
        return sorted(self._categories.values(), key=lambda c: (c.sort_order, c.id))

    def ids(self) -> list[str]:
        return [c.id for c in self.get_all()]

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[JunkCategory]:
        return iter(self.get_all())

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._categories
