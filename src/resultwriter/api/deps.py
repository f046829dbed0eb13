"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from resultwriter.core.engine import ResultWriterEngine

# Engine instance (set during application lifespan)
_engine: ResultWriterEngine | None = None


def set_engine(engine: ResultWriterEngine | None) -> None:
    """Set the engine instance (called during app lifespan)."""
    global _engine
    _engine = engine


def get_engine() -> ResultWriterEngine:
    """Get the ResultWriter engine instance.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("ResultWriter engine not initialized. Is the server running?")
    return _engine
