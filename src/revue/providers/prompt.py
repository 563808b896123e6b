"""Prompt construction for the AI reviewer."""

from typing import TYPE_CHECKING

from revue.models import CommentType

if TYPE_CHECKING:
  from revue.config import Settings

MAX_DIFF_CHARS = 60_000
TRUNCATION_MARKER = "\n... [Diff truncated]"

FOCUS_DESCRIPTIONS: dict[CommentType, str] = {
  CommentType.ERROR: (
    "[ERROR] - Security vulnerabilities (injection, unsafe eval, unvalidated input), "
    "syntax errors, build/runtime breaking logic, incorrect conditions, or any code "
    "that will cause crashes or incorrect results."
  ),
  CommentType.WARN: (
    "[WARN] - Potential problems that may not fail immediately: performance issues, "
    "concurrency risks, missing error handling, data leaks, weak validation, or bad "
    "UX implications."
  ),
  CommentType.TIP: (
    "[TIP] - Readability, maintainability, testability, or minor performance improvements."
  ),
  CommentType.NOTE: "[NOTE] - Broader architectural or design feedback.",
  CommentType.GRAMMAR: "[GRAMMAR] - Grammar, spelling, or naming consistency.",
}

GENERIC_FOCUS = "Focus only on clear, actionable code issues."


def truncate_diff(diff: str, limit: int = MAX_DIFF_CHARS) -> str:
  """Cap the diff at ``limit`` characters, marking the cut."""
  if len(diff) <= limit:
    return diff
  return diff[:limit] + TRUNCATION_MARKER


def enabled_focus(settings: "Settings") -> list[CommentType]:
  """Categories switched on in the settings, in display order."""
  switches = {
    CommentType.ERROR: settings.focus_errors,
    CommentType.WARN: settings.focus_warn,
    CommentType.TIP: settings.focus_tips,
    CommentType.NOTE: settings.focus_notes,
    CommentType.GRAMMAR: settings.focus_grammar,
  }
  return [t for t, on in switches.items() if on]


def build_focus_instructions(focus: list[CommentType]) -> str:
  """Describe the categories the reviewer should report."""
  if not focus:
    return GENERIC_FOCUS
  lines = "\n".join(FOCUS_DESCRIPTIONS[t] for t in focus)
  return f"Only check the code for these focus types:\n{lines}\nBe concise and practical."


def build_system_prompt(focus: list[CommentType]) -> str:
  """Build the system prompt for the review."""
  types = " | ".join(f'"{t.value}"' for t in CommentType)

  return f"""You are a senior software engineer conducting a professional pull-request review.
You are analyzing a unified Git diff (with '@@ -a,b +c,d @@' hunk headers).

Diff format reminder:
- Lines starting with 'diff --git a/... b/...' or '---'/'+++' indicate file paths.
- Lines starting with '+' are added code; '-' are removed code.
- The hunk header '@@ -a,b +c,d @@' means the new code starts at line c in the target file.

When writing comments:
- Always include the file path from the most recent '+++ b/...' line, if available.
- Take the line number from the most recent '@@ ... +c,d @@' header plus the offset of the line within that hunk.
- If the line cannot be determined, omit it (use null). Do not guess.

Rules:
- Identify real, production-relevant issues only. Security, correctness and logic problems come first.
- Each comment must be precise, standalone and actionable, ideally one or two sentences.
- Use direct reviewer phrasing. Prefer short recommendations over long explanations.
- Avoid speculation. If uncertain, use WARN rather than ERROR.
- Do not comment on unchanged or deleted code.
- If no issues exist, return an empty comments array.

Respond with JSON in this exact format:
{{
  "comments": [
    {{
      "file": "path/to/file.ts",
      "line": 42,
      "type": {types},
      "message": "[TYPE] Description of issue"
    }}
  ]
}}

Each message must start with its [TYPE] prefix, e.g. [ERROR] Missing null check.

Classification rules:
{build_focus_instructions(focus)}"""


def build_user_prompt(diff: str) -> str:
  """Build the user prompt containing the (possibly truncated) diff."""
  return f"""Analyze the following Git diff carefully.
Find every applicable issue based on the focus rules above.
Be strict but fair: assume this is a production PR about to be merged.
Each message should be readable in a code review UI at a glance.

{truncate_diff(diff)}"""
