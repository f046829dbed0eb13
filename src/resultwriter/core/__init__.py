"""Query execution — searcher and request handling."""

from resultwriter.core.searcher import Searcher

__all__ = ["Searcher"]
