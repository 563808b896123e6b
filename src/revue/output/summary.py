"""Summary rendering for the console and for platform comments."""

import re

from revue.config import Settings
from revue.models import ReviewResult, ReviewStats, ReviewStatus
from revue.outcome import classify

CLI_TITLE = "Review Summary"
CLI_RULE = "-" * 40
LABEL_WIDTH = 14

TAG_ICONS = {
  "ERROR": "❌",
  "WARN": "⚠️",
  "TIP": "💡",
  "NOTE": "📝",
  "GRAMMAR": "✏️",
}

_TAG = re.compile(r"^\[(ERROR|WARN|TIP|NOTE|GRAMMAR)\]", re.IGNORECASE)


def _category_rows(stats: ReviewStats, settings: Settings) -> list[tuple[str, int]]:
  """Label/count pairs for the enabled focus switches."""
  rows = [
    (settings.focus_errors, "Errors", stats.errors),
    (settings.focus_warn, "Warnings", stats.warns),
    (settings.focus_tips, "Tips", stats.tips),
    (settings.focus_notes, "Notes", stats.notes),
    (settings.focus_grammar, "Grammar", stats.grammar),
  ]
  return [(label, count) for enabled, label, count in rows if enabled]


def _row(label: str, value: object) -> str:
  return f"{label + ':':<{LABEL_WIDTH}}{value}"


def format_cli_summary(result: ReviewResult, settings: Settings) -> str:
  """Plain fixed-width block for consoles and CI logs."""
  stats = classify(result, settings.fail_on_warnings)
  ai_used = "Yes" if stats.ai_used else "No"

  lines = [CLI_TITLE, CLI_RULE]
  if stats.total == 0:
    lines += [
      "No issues found - looks great!",
      _row("Lines added", stats.added_lines),
      _row("AI used", ai_used),
      _row("Status", ReviewStatus.APPROVED.value),
    ]
    return "\n".join(lines)

  lines.append(_row("Comments", stats.total))
  lines += [_row(label, count) for label, count in _category_rows(stats, settings)]
  lines += [
    _row("Lines added", stats.added_lines),
    _row("AI used", ai_used),
    _row("Status", stats.status.value),
  ]
  return "\n".join(lines)


def format_markdown_summary(result: ReviewResult, settings: Settings) -> str:
  """Markdown summary posted as the pull request comment."""
  stats = classify(result, settings.fail_on_warnings)

  if stats.total == 0:
    return "\n".join([
      "### Automated Review Summary",
      "",
      "✅ **No issues found - looks great!** 🎉",
    ])

  icons = {
    "Errors": TAG_ICONS["ERROR"],
    "Warnings": TAG_ICONS["WARN"],
    "Tips": TAG_ICONS["TIP"],
    "Notes": TAG_ICONS["NOTE"],
    "Grammar": TAG_ICONS["GRAMMAR"],
  }
  lines = ["### Automated Review Summary", "", f"**Comments:** {stats.total}"]
  lines += [
    f"- {icons[label]} {label}: {count}" for label, count in _category_rows(stats, settings)
  ]
  lines += [
    "",
    "🚫 **Review Result:** Changes Requested"
    if stats.has_issues
    else "✅ **Review Result:** Approved",
  ]
  return "\n".join(lines)


def beautify_tag_prefix(message: str) -> str:
  """Swap a leading [TYPE] tag for a bold icon."""
  return _TAG.sub(lambda m: f"**[{TAG_ICONS[m.group(1).upper()]}]**", message, count=1)
