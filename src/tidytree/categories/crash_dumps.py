"""Category for crash dumps and error reports."""

from __future__ import annotations

from tidytree.models.category import JunkCategory, MatchContext

_EXTENSIONS = frozenset({"dmp", "mdmp", "wer"})


class CrashDumpsCategory(JunkCategory):
    id = "crash-dumps"
    label = "Crash Reports"
    description = (
        "Memory dumps (.dmp, .mdmp) and error reports (.wer) written after a crash. "
        "Only useful for debugging that crash."
    )
    sort_order = 60

    def matches(self, context: MatchContext) -> bool:
        return context.extension in _EXTENSIONS and context.path_contains("temp", "crash", "reports")
