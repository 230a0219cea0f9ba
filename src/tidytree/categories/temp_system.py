"""Category for system and application temporary files."""

from __future__ import annotations

from tidytree.models.category import JunkCategory, MatchContext

_EXTENSIONS = frozenset({"tmp", "temp", "bak", "old"})


class TempSystemCategory(JunkCategory):
    """Temp extensions, ``~`` lock/backup files and anything under a ``temp`` folder."""

    id = "temp-system"
    label = "System Temporary Files"
    description = (
        "Files ending in .tmp, .temp, .bak or .old, names starting with '~', "
        "and files inside folders called 'Temp'."
    )
    sort_order = 10

    def matches(self, context: MatchContext) -> bool:
        return (
            context.extension in _EXTENSIONS
            or context.name.startswith("~")
            or "temp" in context.directories
        )
