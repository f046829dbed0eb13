"""Index schema — Field declarations and stored-field materialization.

The schema decides which stored values of a document are visible to
response writers and how raw stored values are converted:

  - Only declared, stored fields are copied.
  - Copy-field destinations are skipped (they duplicate their source).
  - Values of multi-valued fields accumulate into a list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from resultwriter.config.settings import FieldConfig, IndexSettings
from resultwriter.models.document import RenderedDocument
from resultwriter.store.exceptions import CorruptDocumentError

logger = logging.getLogger(__name__)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "t", "1", "yes"}:
            return True
        if lowered in {"false", "f", "0", "no"}:
            return False
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")


def _to_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "string": str,
    "text": str,
    "int": int,
    "float": float,
    "bool": _to_bool,
    "date": _to_date,
}


class SchemaField:
    """A declared field and its value conversion."""

    def __init__(self, name: str, type_name: str = "string", stored: bool = True, multi_valued: bool = False) -> None:
        if type_name not in _CONVERTERS:
            raise ValueError(f"Unknown field type '{type_name}' for field '{name}'")
        self.name = name
        self.type_name = type_name
        self.stored = stored
        self.multi_valued = multi_valued
        self._convert = _CONVERTERS[type_name]

    @classmethod
    def from_config(cls, config: FieldConfig) -> SchemaField:
        return cls(config.name, config.type, stored=config.stored, multi_valued=config.multi_valued)

    @property
    def is_text(self) -> bool:
        return self.type_name in {"string", "text"}

    def to_object(self, raw: Any) -> Any:
        """Convert one raw stored value to its Python representation."""
        return self._convert(raw)

    def __repr__(self) -> str:
        return f"SchemaField({self.name!r}, {self.type_name!r}, stored={self.stored}, multi_valued={self.multi_valued})"


class IndexSchema:
    """Collection of declared fields for one result store.

    Args:
        fields: Declared fields.
        unique_key: Name of the identifier field.
        copy_fields: Mapping of copy-field source to destination.
    """

    def __init__(
        self,
        fields: list[SchemaField],
        unique_key: str = "id",
        copy_fields: Mapping[str, str] | None = None,
    ) -> None:
        self._fields: dict[str, SchemaField] = {}
        for field in fields:
            if field.name in self._fields:
                raise ValueError(f"Duplicate schema field '{field.name}'")
            self._fields[field.name] = field
        if unique_key not in self._fields:
            raise ValueError(f"Unique key field '{unique_key}' is not declared")
        self.unique_key = unique_key
        self._copy_fields = dict(copy_fields or {})
        self._copy_targets = set(self._copy_fields.values())

    @classmethod
    def from_settings(cls, settings: IndexSettings) -> IndexSchema:
        return cls(
            [SchemaField.from_config(f) for f in settings.fields],
            unique_key=settings.unique_key,
            copy_fields=settings.copy_fields,
        )

    @property
    def fields(self) -> dict[str, SchemaField]:
        return dict(self._fields)

    def get_field_or_none(self, name: str) -> SchemaField | None:
        return self._fields.get(name)

    def is_copy_field_target(self, name: str) -> bool:
        return name in self._copy_targets

    def copy_sources(self, name: str) -> list[str]:
        """Fields whose values are copied into ``name``."""
        return [source for source, dest in self._copy_fields.items() if dest == name]

    def text_fields(self) -> list[str]:
        """Names of stored, text-like fields (used for unqualified matching).

        Copy-field destinations are left out; their sources are already listed.
        """
        return [
            f.name for f in self._fields.values() if f.stored and f.is_text and not self.is_copy_field_target(f.name)
        ]

    def load_stored_fields(self, document: RenderedDocument, stored: Mapping[str, Any]) -> RenderedDocument:
        """Copy the visible stored values of ``stored`` into ``document``.

        Raises:
            CorruptDocumentError: If a value cannot be converted to its field type.
        """
        for name, raw in stored.items():
            field = self._fields.get(name)
            if field is None:
                logger.debug("Skipping undeclared stored field: %s", name)
                continue
            if not field.stored or self.is_copy_field_target(name):
                continue
            raw_values = raw if isinstance(raw, list) else [raw]
            for value in raw_values:
                try:
                    converted = field.to_object(value)
                except (TypeError, ValueError) as e:
                    raise CorruptDocumentError(
                        f"Stored value {value!r} of field '{name}' is not a valid {field.type_name}"
                    ) from e
                if field.multi_valued:
                    document.setdefault(name, []).append(converted)
                else:
                    document.add_field(name, converted)
        return document
