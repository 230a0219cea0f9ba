"""Category for browser and application caches."""

from __future__ import annotations

from tidytree.models.category import JunkCategory, MatchContext

_PATH_KEYWORDS = ("cache", "code cache", "gpu cache", "appdata/local/temp", "appdata/local/cache")
_EXTENSIONS = frozenset({"cache", "tmp", "temp", "dat"})


class CacheBrowserCategory(JunkCategory):
    id = "cache-browser"
    label = "Browser and App Caches"
    description = "Files stored under Cache, Code Cache, GPUCache or AppData/Local/Temp folders."
    sort_order = 20

    def matches(self, context: MatchContext) -> bool:
        return context.path_contains(*_PATH_KEYWORDS) or context.extension in _EXTENSIONS
