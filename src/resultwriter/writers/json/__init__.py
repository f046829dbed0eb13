"""JSON response writer."""

from resultwriter.writers.json.writer import CONTENT_TYPE_JSON_UTF8, JsonResponseWriter

__all__ = ["CONTENT_TYPE_JSON_UTF8", "JsonResponseWriter"]
