"""Store Registry — Maps backend names to result store classes.

Store classes are registered by name; ``create()`` instantiates and opens
one from configuration.  Built-in backends are imported lazily so that a
backend's dependencies are only needed when it is used.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from resultwriter.store.base import ResultStore

logger = logging.getLogger(__name__)

# Maps built-in backend names to (module_path, class_name) for lazy import
_BUILTIN_STORES: dict[str, tuple[str, str]] = {
    "memory": ("resultwriter.store.memory", "MemoryStore"),
    "jsonl": ("resultwriter.store.jsonl", "JsonlStore"),
}


class StoreNotFoundError(Exception):
    """Raised when a requested store backend is not registered."""


class StoreRegistry:
    """Registry of result store classes.

    Example:
        >>> registry = StoreRegistry()
        >>> store = registry.create("jsonl", path="docs.jsonl")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[ResultStore]] = {}

    def register(self, name: str, store_class: type[ResultStore]) -> None:
        """Register a store class under ``name``."""
        if name in self._classes:
            logger.warning("Overwriting existing store registration: %s", name)
        self._classes[name] = store_class
        logger.debug("Registered store: %s", name)

    def get_class(self, name: str) -> type[ResultStore]:
        """Return the store class for ``name``, importing a built-in on first use.

        Raises:
            StoreNotFoundError: If no store is registered under this name.
        """
        if name not in self._classes and name in _BUILTIN_STORES:
            module_path, class_name = _BUILTIN_STORES[name]
            module = importlib.import_module(module_path)
            self._classes[name] = getattr(module, class_name)
        if name not in self._classes:
            raise StoreNotFoundError(
                f"No store registered with name '{name}'. "
                f"Available stores: {self.registered_stores}"
            )
        return self._classes[name]

    def create(self, name: str, **kwargs: Any) -> ResultStore:
        """Create and open a store instance.

        Args:
            name: The registered store name.
            **kwargs: Constructor arguments for the store class.

        Returns:
            The opened store.
        """
        store = self.get_class(name)(**kwargs)
        store.open()
        logger.info("Opened store: %s", name)
        return store

    @property
    def registered_stores(self) -> list[str]:
        """All registered and built-in store names."""
        return sorted(set(self._classes) | set(_BUILTIN_STORES))
