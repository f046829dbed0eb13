"""Writer-specific exceptions.

All are terminal for the current render; none are retried.
"""


class WriterError(Exception):
    """Base exception for response writer errors."""


class TemplateError(WriterError):
    """Raised when a template cannot be located, compiled, or executed."""


class TypeResolutionError(WriterError):
    """Raised when a structured response type cannot be resolved or does not conform."""


class RenderError(WriterError):
    """Raised when a stored document cannot be materialized during rendering."""
