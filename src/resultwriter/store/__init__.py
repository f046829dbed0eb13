"""Result store layer — Document storage addressed by internal reference.

Built-in stores:
  - memory: documents held in a Python list
  - jsonl: one JSON document per line in a file, read on demand

Implement ``ResultStore`` to serve documents from another backend.
"""

from resultwriter.store.base import ResultStore, StoreHealth
from resultwriter.store.registry import StoreRegistry

__all__ = ["ResultStore", "StoreHealth", "StoreRegistry"]
