"""Template loader — Jinja2 templates read from one configured directory."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any, TextIO

import jinja2

from resultwriter.writers.base.exceptions import TemplateError


def _join_values(value: Any, separator: str = ", ") -> str:
    """Join a multi-valued field; single values pass through as text."""
    if isinstance(value, (list, tuple)):
        return separator.join(str(v) for v in value)
    return "" if value is None else str(value)


def _first_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


class TemplateLoader:
    """Loads and executes templates from ``directory``.

    Template names are given without suffix and must stay inside the
    directory: absolute names and ``..`` segments are rejected.

    Args:
        directory: Directory holding the template files.
        suffix: File suffix appended to every template name.
        autoescape: Enable HTML autoescaping.
        trim_blocks: Remove the first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before a block tag.
    """

    def __init__(
        self,
        directory: str | Path,
        suffix: str = ".j2",
        autoescape: bool = False,
        trim_blocks: bool = True,
        lstrip_blocks: bool = True,
    ) -> None:
        self.directory = Path(directory)
        self.suffix = suffix
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.directory)),
            autoescape=autoescape,
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
            keep_trailing_newline=True,
        )
        self.env.filters["join_values"] = _join_values
        self.env.filters["first_value"] = _first_value

    def _file_name(self, name: str) -> str:
        path = PurePosixPath(name.replace("\\", "/"))
        if not name or path.is_absolute() or ".." in path.parts:
            raise TemplateError(f"Template name '{name}' is outside the template directory")
        return f"{path}{self.suffix}"

    def get_template(self, name: str) -> jinja2.Template:
        """Load and compile the template called ``name``.

        Raises:
            TemplateError: If the template is missing, outside the directory,
                or does not compile.
        """
        file_name = self._file_name(name)
        try:
            return self.env.get_template(file_name)
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Template '{name}' not found in {self.directory}") from e
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"Template '{name}' failed to parse at line {e.lineno}: {e.message}") from e

    def merge(self, template: jinja2.Template, context: Mapping[str, Any]) -> str:
        """Execute ``template`` against ``context`` and return the text."""
        try:
            return template.render(context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Template '{template.name}' failed: {e}") from e

    def merge_into(self, template: jinja2.Template, context: Mapping[str, Any], writer: TextIO) -> None:
        """Execute ``template`` against ``context``, streaming chunks to ``writer``."""
        try:
            for chunk in template.generate(context):
                writer.write(chunk)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Template '{template.name}' failed: {e}") from e
