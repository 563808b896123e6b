"""Code quality heuristics."""

from revue.rules.quality.debug import ConsoleLogRule, DebuggerStatementRule
from revue.rules.quality.todos import TodoCommentRule
from revue.rules.quality.any_type import AnyTypeRule

__all__ = [
  "AnyTypeRule",
  "ConsoleLogRule",
  "DebuggerStatementRule",
  "TodoCommentRule",
]
