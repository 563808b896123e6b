"""todo-comment: TODO markers in added code."""

import re

from revue.rules.registry import register_rule


class TodoCommentRule:
  """Flags any added line mentioning TODO, in any letter case."""

  PATTERN = re.compile(r"TODO", re.IGNORECASE)

  @property
  def id(self) -> str:
    return "todo-comment"

  @property
  def name(self) -> str:
    return "TODO comment"

  def check(self, content: str) -> str | None:
    if self.PATTERN.search(content):
      return f"Avoid TODOs in production code: {content.strip()}"
    return None


def _create_todo_comment() -> TodoCommentRule:
  return TodoCommentRule()


register_rule("todo-comment", _create_todo_comment)
