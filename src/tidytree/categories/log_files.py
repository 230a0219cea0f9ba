"""Category for old log and diagnostic files."""

from __future__ import annotations

from tidytree.models.category import ONE_DAY, JunkCategory, MatchContext

_EXTENSIONS = frozenset({"log", "etl", "txt"})
_MIN_AGE = 7 * ONE_DAY


class LogFilesCategory(JunkCategory):
    """Log files untouched for more than a week. Recent logs may still be in use."""

    id = "log-files"
    label = "Old Logs and Reports"
    description = "Diagnostic .log, .etl and .txt files not modified in the last 7 days."
    sort_order = 30

    def matches(self, context: MatchContext) -> bool:
        return context.extension in _EXTENSIONS and context.age > _MIN_AGE
