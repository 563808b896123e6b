"""Source-control platform adapters."""

from revue.platforms.base import (
  InlineCommenter,
  MetadataProvider,
  PlatformAdapter,
  PlatformError,
  PullRequestMetadata,
  StatusSetter,
)
from revue.platforms.registry import (
  PlatformNotFoundError,
  PlatformRegistry,
  create_adapter,
  list_platforms,
)

__all__ = [
  "InlineCommenter",
  "MetadataProvider",
  "PlatformAdapter",
  "PlatformError",
  "PlatformNotFoundError",
  "PlatformRegistry",
  "PullRequestMetadata",
  "StatusSetter",
  "create_adapter",
  "list_platforms",
]
