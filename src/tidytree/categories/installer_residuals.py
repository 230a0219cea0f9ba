"""Category for leftovers of installers and interrupted downloads."""

from __future__ import annotations

from tidytree.models.category import JunkCategory, MatchContext

_EXTENSIONS = frozenset({"msi", "cab", "part", "crdownload"})


class InstallerResidualsCategory(JunkCategory):
    id = "installer-residuals"
    label = "Installer Leftovers"
    description = "Update and installer remains (.msi, .cab, .part, .crdownload) kept in Temp or Downloads."
    sort_order = 40

    def matches(self, context: MatchContext) -> bool:
        return context.extension in _EXTENSIONS and context.path_contains("temp", "download")
