"""Provider discovery and registration."""

from typing import Callable

from revue.errors import RevueError
from revue.providers.base import CompletionService
from revue.providers.detection import ProviderDetector


class ProviderNotFoundError(RevueError):
  """Requested provider not found."""


class ProviderUnavailableError(RevueError):
  """Provider found but not available (missing API key, etc)."""


ProviderFactory = Callable[[str | None, str | None], CompletionService]

_providers: dict[str, ProviderFactory] = {}


def register_provider(name: str, factory: ProviderFactory) -> None:
  """Register a provider factory."""
  _providers[name] = factory


def get_provider(
  name: str,
  model: str | None = None,
  api_key: str | None = None,
) -> CompletionService:
  """Get a provider by name."""
  if name not in _providers:
    available = ", ".join(_providers.keys()) or "none"
    raise ProviderNotFoundError(
      f"Provider '{name}' not found. Available: {available}"
    )

  provider = _providers[name](model, api_key)

  if not provider.is_available():
    detector = ProviderDetector(list(_providers))
    raise ProviderUnavailableError(detector.format_error(name))

  return provider


def list_providers() -> list[str]:
  """List registered provider names."""
  return list(_providers.keys())


class ProviderRegistry:
  """Registry for lazy provider loading."""

  @staticmethod
  def load_all() -> None:
    """Load all provider modules to trigger registration."""
    from revue.providers import anthropic, ollama, openai  # noqa: F401
