"""Category for file-manager thumbnail and icon caches."""

from __future__ import annotations

from tidytree.models.category import JunkCategory, MatchContext

_NAMES = frozenset({"thumbs.db", "desktop.ini", "iconcache.db", "ehthumbs.db"})


class ThumbCacheCategory(JunkCategory):
    """Explorer-generated metadata files, recreated on the next folder visit."""

    id = "thumb-cache"
    label = "Thumbnail Cache"
    description = "thumbs.db, desktop.ini, IconCache.db and ehthumbs.db files."
    sort_order = 50

    def matches(self, context: MatchContext) -> bool:
        return context.name in _NAMES
