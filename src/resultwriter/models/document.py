"""Rendered document model — Field-name mapping handed to templates."""

from __future__ import annotations

from typing import Any


class RenderedDocument(dict[str, Any]):
    """A document materialized from the store for presentation.

    Single-valued fields map to their value; multi-valued fields map to a
    list.  Templates may use either ``doc.title`` or ``doc["title"]``.
    """

    def add_field(self, name: str, value: Any) -> None:
        """Add a value, turning the field into a list on the second value."""
        if name not in self:
            self[name] = value
            return
        existing = self[name]
        if isinstance(existing, list):
            existing.append(value)
        else:
            self[name] = [existing, value]

    def get_first_value(self, name: str) -> Any:
        """Return the first value of ``name`` (``None`` if absent)."""
        value = self.get(name)
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def get_field_values(self, name: str) -> list[Any]:
        """Return all values of ``name`` as a list."""
        value = self.get(name)
        if value is None:
            return []
        return list(value) if isinstance(value, list) else [value]

    @property
    def field_names(self) -> list[str]:
        return list(self.keys())
