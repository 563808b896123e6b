"""AI completion services for review."""

from revue.providers.base import CompletionRequest, CompletionService
from revue.providers.registry import (
  ProviderNotFoundError,
  ProviderRegistry,
  ProviderUnavailableError,
  get_provider,
  list_providers,
)

__all__ = [
  "CompletionRequest",
  "CompletionService",
  "ProviderNotFoundError",
  "ProviderRegistry",
  "ProviderUnavailableError",
  "get_provider",
  "list_providers",
]
