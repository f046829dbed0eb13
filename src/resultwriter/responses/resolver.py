"""Type resolver — Turns a ``responseType`` name into a structured response.

Resolution order for a name:
  1. A factory registered under exactly that name
  2. The name as a dotted path (``my.package.CustomResult``)
  3. The name under the default namespace (``QueryResult`` ->
     ``resultwriter.responses.QueryResult``)

Classes are checked against :class:`StructuredResponse` before they are
instantiated, so a non-conforming name never runs foreign constructors.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable

from resultwriter.responses.base import StructuredResponse
from resultwriter.writers.base.exceptions import TypeResolutionError

logger = logging.getLogger(__name__)

ResponseFactory = Callable[[], StructuredResponse]

DEFAULT_NAMESPACE = "resultwriter.responses."


def _import_attribute(path: str) -> object | None:
    """Import ``module.attr`` from a dotted path; None if it does not exist."""
    module_path, sep, attr = path.rpartition(".")
    if not sep or not module_path or not attr:
        return None
    try:
        module = importlib.import_module(module_path)
    except (ImportError, TypeError, ValueError):
        # relative or malformed module paths such as "." do not resolve
        return None
    return getattr(module, attr, None)


class TypeResolver:
    """Registry-backed resolver for structured response types.

    Args:
        namespace: Module prefix tried for names that do not resolve as given.

    Example:
        >>> resolver = TypeResolver()
        >>> resolver.register("results", QueryResult)
        >>> response = resolver.resolve("results")
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self._factories: dict[str, ResponseFactory] = {}

    def register(self, name: str, factory: ResponseFactory) -> None:
        """Register a factory (usually a StructuredResponse subclass) under ``name``."""
        if isinstance(factory, type) and not issubclass(factory, StructuredResponse):
            raise TypeError(f"{factory.__name__} is not a StructuredResponse")
        self._factories[name] = factory

    @property
    def registered_types(self) -> list[str]:
        return list(self._factories.keys())

    def _lookup(self, name: str) -> object | None:
        if name in self._factories:
            return self._factories[name]
        found = _import_attribute(name)
        if found is None and self.namespace:
            found = _import_attribute(self.namespace + name)
        return found

    def resolve(self, name: str) -> StructuredResponse:
        """Create an empty structured response for ``name``.

        Raises:
            TypeResolutionError: If ``name`` is unknown or does not denote a
                StructuredResponse.
        """
        if not name or not name.strip():
            raise TypeResolutionError("Unable to resolve response type \"\": empty name")

        key = name.strip()
        target = self._lookup(key)
        if target is None:
            raise TypeResolutionError(f"Unable to resolve response type \"{name}\": not found")
        # only registered factories may be plain callables; imported names must be classes
        if key not in self._factories and not isinstance(target, type):
            raise TypeResolutionError(f"\"{name}\" is not a class")
        if isinstance(target, type) and not issubclass(target, StructuredResponse):
            raise TypeResolutionError(f"Type \"{name}\" is not a StructuredResponse")
        if not callable(target):
            raise TypeResolutionError(f"Type \"{name}\" is not instantiable")

        try:
            instance = target()
        except Exception as e:
            raise TypeResolutionError(f"Unable to instantiate response type \"{name}\": {e}") from e
        if not isinstance(instance, StructuredResponse):
            raise TypeResolutionError(f"Type \"{name}\" is not a StructuredResponse")

        logger.debug("Resolved response type %s -> %s", name, type(instance).__name__)
        return instance
