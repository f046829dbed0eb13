"""Response writer layer — Pluggable formatters for query responses.

Built-in writers:
  - template: renders results through a named Jinja2 template, optionally
    wrapped as a script-callback payload
  - json: serializes the parsed response as JSON

Implement ``ResponseWriter`` to add another output format.
"""
