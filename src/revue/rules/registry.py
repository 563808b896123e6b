"""Rule registration and discovery."""

from typing import Callable, Sequence

from revue.rules.base import Rule

RuleFactory = Callable[[], Rule]

_rules: dict[str, RuleFactory] = {}


class RuleNotFoundError(KeyError):
  """Requested rule id is not registered."""


def register_rule(rule_id: str, factory: RuleFactory) -> None:
  """Register a rule factory.

  Args:
    rule_id: Unique identifier for the rule (e.g., 'todo-comment').
    factory: Callable that returns a Rule instance.
  """
  _rules[rule_id] = factory


def get_rules(rule_ids: Sequence[str]) -> list[Rule]:
  """Instantiate rules in the order given."""
  missing = [r for r in rule_ids if r not in _rules]
  if missing:
    raise RuleNotFoundError(f"Unknown rules: {', '.join(missing)}")
  return [_rules[r]() for r in rule_ids]


def list_rules() -> list[str]:
  """List all registered rule IDs."""
  return list(_rules.keys())


class RuleRegistry:
  """Registry for lazy rule loading."""

  @staticmethod
  def load_all() -> None:
    """Load all rule modules to trigger registration.

    Call this before using get_rules() to ensure the built-in rules are
    registered.
    """
    # Each module registers its rules at import time
    from revue.rules.quality import (
      any_type,  # noqa: F401
      debug,  # noqa: F401
      todos,  # noqa: F401
    )
