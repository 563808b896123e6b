"""any-type: overly permissive type annotations."""

import re

from revue.rules.registry import register_rule


class AnyTypeRule:
  """Flags the whole word ``any``, as used in TypeScript annotations."""

  PATTERN = re.compile(r"\bany\b")

  @property
  def id(self) -> str:
    return "any-type"

  @property
  def name(self) -> str:
    return "any type"

  def check(self, content: str) -> str | None:
    if self.PATTERN.search(content):
      return "TypeScript 'any' used - prefer explicit types."
    return None


def _create_any_type() -> AnyTypeRule:
  return AnyTypeRule()


register_rule("any-type", _create_any_type)
