"""Heuristic rule-based review engine."""

from revue.rules.base import Rule
from revue.rules.engine import LARGE_DIFF_THRESHOLD, RuleEngine, ScanResult
from revue.rules.registry import RuleRegistry, get_rules, list_rules, register_rule

__all__ = [
  "LARGE_DIFF_THRESHOLD",
  "Rule",
  "RuleEngine",
  "RuleRegistry",
  "ScanResult",
  "get_rules",
  "list_rules",
  "register_rule",
]
