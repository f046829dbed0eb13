"""Index schema — field declarations for stored documents."""

from resultwriter.schema.schema import IndexSchema, SchemaField

__all__ = ["IndexSchema", "SchemaField"]
