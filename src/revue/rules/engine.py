"""Rule engine that scans added diff lines."""

from dataclasses import dataclass
from typing import Sequence

from revue.models import CommentSource, ReviewComment
from revue.rules.base import Rule
from revue.rules.registry import RuleRegistry, get_rules

# Rules run on every added line in this order.
DEFAULT_RULE_IDS = ("todo-comment", "console-log", "debugger-statement")
ANY_TYPE_RULE_ID = "any-type"

LARGE_DIFF_THRESHOLD = 500

_METADATA_PREFIXES = ("+++", "---", "diff ")


@dataclass(frozen=True)
class ScanResult:
  """Heuristic comments plus the added-line count."""

  comments: Sequence[ReviewComment]
  added_lines: int


def default_rule_ids(flag_any_type: bool = True) -> tuple[str, ...]:
  """Rule ids for the default scan, optionally with the any-type check."""
  if flag_any_type:
    return DEFAULT_RULE_IDS + (ANY_TYPE_RULE_ID,)
  return DEFAULT_RULE_IDS


class RuleEngine:
  """Runs line rules over the added lines of a unified diff.

  Comments carry no file or line: the rules match on content only.

  Example:
    engine = RuleEngine()
    result = engine.scan(diff)
  """

  def __init__(self, rules: list[Rule] | None = None, flag_any_type: bool = True):
    """Initialize the rule engine.

    Args:
      rules: Optional list of rules to use. If None, the built-in rules are
             loaded from the registry.
      flag_any_type: Include the any-type rule when loading built-in rules.
    """
    if rules is None:
      RuleRegistry.load_all()
      rules = get_rules(default_rule_ids(flag_any_type))
    self._rules = rules

  @property
  def rules(self) -> list[Rule]:
    return list(self._rules)

  def scan(self, diff: str) -> ScanResult:
    """Scan a normalized diff.

    Args:
      diff: Unified diff text with LF line endings.

    Returns:
      ScanResult with comments in line order and the added-line count.
    """
    comments: list[ReviewComment] = []
    added_lines = 0

    for line in diff.split("\n"):
      if line.startswith(_METADATA_PREFIXES):
        continue
      if not line.startswith("+"):
        continue

      added_lines += 1
      content = line[1:]
      for rule in self._rules:
        message = rule.check(content)
        if message:
          comments.append(ReviewComment(message=message, source=CommentSource.HEURISTIC))

    if added_lines > LARGE_DIFF_THRESHOLD:
      comments.append(ReviewComment(
        message=(
          f"Large diff with {added_lines} added lines – "
          "consider splitting into smaller PRs."
        ),
        source=CommentSource.HEURISTIC,
      ))

    return ScanResult(comments=comments, added_lines=added_lines)
