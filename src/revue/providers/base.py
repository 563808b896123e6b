"""Base completion service protocol."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CompletionRequest:
  """A single schema-constrained completion request."""

  system: str
  user: str
  schema_name: str
  schema: dict[str, Any] = field(repr=False)
  temperature: float = 1.0
  max_tokens: int = 1500


class CompletionService(ABC):
  """Abstract base for structured-completion AI services."""

  @abstractmethod
  def complete(self, request: CompletionRequest) -> Any:
    """Run one completion and return the parsed structured output."""
    ...

  @property
  @abstractmethod
  def name(self) -> str:
    """Provider name."""
    ...

  @property
  @abstractmethod
  def model(self) -> str:
    """Model being used."""
    ...

  @abstractmethod
  def is_available(self) -> bool:
    """Check if provider is configured and available."""
    ...
