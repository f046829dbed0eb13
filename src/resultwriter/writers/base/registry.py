"""Writer Registry — Registration and lookup of response writers.

Writer classes are registered by name and instantiated once by
``initialize_writer()``, which also calls the writer's ``init()`` with its
configured arguments.  Requests then look writers up by the ``wt``
parameter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from resultwriter.writers.base.writer import ResponseWriter

logger = logging.getLogger(__name__)


class WriterNotFoundError(Exception):
    """Raised when a requested writer is not registered."""


class WriterRegistry:
    """Registry for response writer instances.

    Example:
        >>> registry = WriterRegistry(default="template")
        >>> registry.register("template", TemplateResponseWriter)
        >>> registry.initialize_writer("template", {"directory": "templates"})
        >>> writer = registry.get("template")
    """

    def __init__(self, default: str = "template") -> None:
        self._classes: dict[str, type[ResponseWriter]] = {}
        self._instances: dict[str, ResponseWriter] = {}
        self.default = default

    def register(self, name: str, writer_class: type[ResponseWriter]) -> None:
        """Register a writer class.

        Args:
            name: Unique name for this writer.
            writer_class: The writer class to register.
        """
        if name in self._classes:
            logger.warning("Overwriting existing writer registration: %s", name)
        self._classes[name] = writer_class
        logger.info("Registered writer: %s", name)

    def initialize_writer(
        self,
        name: str,
        args: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> ResponseWriter:
        """Create a writer instance and call its ``init()``.

        Args:
            name: The registered writer name.
            args: Arguments handed to ``init()``.
            **kwargs: Constructor arguments.

        Raises:
            WriterNotFoundError: If no writer is registered under this name.
        """
        if name not in self._classes:
            raise WriterNotFoundError(
                f"No writer registered with name '{name}'. "
                f"Available writers: {list(self._classes.keys())}"
            )
        writer = self._classes[name](**kwargs)
        writer.init(args or {})
        self._instances[name] = writer
        logger.info("Initialized writer: %s", name)
        return writer

    def add(self, writer: ResponseWriter) -> None:
        """Install an already configured writer instance under its own name."""
        self._instances[writer.name] = writer

    def get(self, name: str | None = None) -> ResponseWriter:
        """Return the writer for ``name`` (the default writer when None).

        Raises:
            WriterNotFoundError: If the writer is not initialized.
        """
        key = name or self.default
        if key not in self._instances:
            raise WriterNotFoundError(
                f"Writer '{key}' is not initialized. "
                f"Active writers: {self.active_writers}"
            )
        return self._instances[key]

    def get_default(self) -> ResponseWriter:
        """Return the writer used when a request names none."""
        return self.get(self.default)

    @property
    def registered_writers(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_writers(self) -> list[str]:
        return list(self._instances.keys())
