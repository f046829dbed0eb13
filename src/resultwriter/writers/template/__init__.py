"""Template response writer — Results rendered through Jinja2 templates."""

from resultwriter.writers.template.writer import TemplateResponseWriter, wrap_json

__all__ = ["TemplateResponseWriter", "wrap_json"]
