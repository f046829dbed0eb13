"""Result store exceptions."""


class StoreError(Exception):
    """Base exception for result store errors."""


class StoreIOError(StoreError):
    """Raised when the underlying storage cannot be read."""


class CorruptDocumentError(StoreError):
    """Raised when a stored document cannot be decoded or converted."""


class DocumentNotFoundError(StoreError):
    """Raised when a document reference is outside the store."""


class ConfigurationError(StoreError):
    """Raised when store configuration is invalid."""
