"""Output formatting."""

from revue.output.formatter import (
  JsonFormatter,
  OutputFormatter,
  TerminalFormatter,
  build_envelope,
  comment_location,
  get_formatter,
)
from revue.output.summary import (
  beautify_tag_prefix,
  format_cli_summary,
  format_markdown_summary,
)

__all__ = [
  "JsonFormatter",
  "OutputFormatter",
  "TerminalFormatter",
  "beautify_tag_prefix",
  "build_envelope",
  "comment_location",
  "format_cli_summary",
  "format_markdown_summary",
  "get_formatter",
]
