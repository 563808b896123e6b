"""Output formatting for review results."""

import json
from abc import ABC, abstractmethod
from typing import Any

from rich.console import Console
from rich.markup import escape

from revue.config import Settings
from revue.models import ReviewComment, ReviewResult
from revue.output.summary import format_cli_summary


class OutputFormatter(ABC):
  """Base output formatter."""

  @abstractmethod
  def format(self, result: ReviewResult, settings: Settings) -> str:
    """Format review result for output."""
    ...


class TerminalFormatter(OutputFormatter):
  """Dry-run console output: summary line, one line per comment, summary block."""

  def __init__(self, console: Console | None = None):
    self.console = console or Console(stderr=True)

  def format(self, result: ReviewResult, settings: Settings) -> str:
    self.console.print("[bold]--- DRY RUN ---[/bold]")
    self.console.print(escape(result.summary))
    for comment in result.comments:
      self.console.print(f"- {escape(comment_location(comment))} {escape(comment.message)}")
    self.console.print()
    self.console.print(format_cli_summary(result, settings), markup=False, highlight=False)
    return ""


class JsonFormatter(OutputFormatter):
  """Machine-readable envelope for CI consumers."""

  def format(self, result: ReviewResult, settings: Settings) -> str:
    return json.dumps(build_envelope(result, settings), indent=2, ensure_ascii=False)


def comment_location(comment: ReviewComment) -> str:
  """``file:line`` when both are known, else ``(no location)``."""
  if comment.has_location:
    return f"{comment.file}:{comment.line}"
  return "(no location)"


def build_envelope(result: ReviewResult, settings: Settings) -> dict[str, Any]:
  """JSON envelope with summary, comments, stats and run identity."""
  return {
    "summary": result.summary,
    "comments": [
      {
        "file": c.file,
        "line": c.line,
        "message": c.message,
        "source": c.source.value,
        "type": c.category.value if c.category else None,
      }
      for c in result.comments
    ],
    "stats": {
      "addedLines": result.raw_diff_stats.added_lines,
      "totalLines": result.raw_diff_stats.total_lines,
    },
    "aiUsed": result.ai_used,
    "provider": settings.platform,
    "pullRequestId": settings.pull_request_id,
  }


def get_formatter(format_type: str) -> OutputFormatter:
  """Get formatter by type name."""
  formatters = {
    "terminal": TerminalFormatter,
    "json": JsonFormatter,
  }
  formatter_class = formatters.get(format_type)
  if not formatter_class:
    raise ValueError(f"Unknown format: {format_type}")
  return formatter_class()
