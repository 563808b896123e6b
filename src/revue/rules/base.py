"""Rule abstractions for heuristic review."""

from typing import Protocol


class Rule(Protocol):
  """Protocol for heuristic line rules.

  Each rule inspects the content of a single added line (leading ``+``
  already stripped) and returns a comment message when it fires. Rules are
  stateless.

  Example:
    class NoPrintRule:
      @property
      def id(self) -> str:
        return "no-print"

      @property
      def name(self) -> str:
        return "print-call"

      def check(self, content: str) -> str | None:
        return "print() left in code" if "print(" in content else None
  """

  @property
  def id(self) -> str:
    """Unique identifier used for registration and ordering."""
    ...

  @property
  def name(self) -> str:
    """Human-readable rule name."""
    ...

  def check(self, content: str) -> str | None:
    """Return a comment message for the line, or None."""
    ...
