"""Base writer interface — Abstract classes for response writers."""

from resultwriter.writers.base.registry import WriterRegistry
from resultwriter.writers.base.writer import ResponseWriter

__all__ = ["ResponseWriter", "WriterRegistry"]
