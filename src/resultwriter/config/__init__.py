"""Configuration package."""

from resultwriter.config.settings import Settings

__all__ = ["Settings"]
