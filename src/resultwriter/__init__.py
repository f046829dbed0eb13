"""ResultWriter — Search service with template-driven response writers."""

__version__ = "0.1.0"
