"""Discovery of the built-in junk categories."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType

from tidytree.core.registry import CategoryRegistry
from tidytree.models.category import JunkCategory

log = logging.getLogger(__name__)


def _find_categories_in_module(module: ModuleType) -> list[type[JunkCategory]]:
    """Find all concrete JunkCategory subclasses defined in a module."""
    found: list[type[JunkCategory]] = []
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if issubclass(obj, JunkCategory) and not inspect.isabstract(obj) and obj.__module__ == module.__name__:
            found.append(obj)
    return found


def _load_builtin_categories() -> list[type[JunkCategory]]:
    """Load categories from the tidytree.categories package."""
    import tidytree.categories as categories_pkg

    found: list[type[JunkCategory]] = []
    for _importer, modname, _ispkg in pkgutil.iter_modules(categories_pkg.__path__):
        try:
            module = importlib.import_module(f"tidytree.categories.{modname}")
            found.extend(_find_categories_in_module(module))
        except Exception:
            log.exception("Failed to load built-in category module: %s", modname)
    return found


def load_categories(registry: CategoryRegistry) -> None:
    """Instantiate and register every built-in category."""
    for cls in _load_builtin_categories():
        try:
            registry.register(cls())
        except Exception:
            log.exception("Failed to instantiate category: %s", cls.__name__)

    log.info("Loaded %d junk categories", len(registry))


def default_registry() -> CategoryRegistry:
    """Return a registry holding the built-in categories."""
    registry = CategoryRegistry()
    load_categories(registry)
    return registry
