"""Platform adapter registration."""

from typing import TYPE_CHECKING, Callable

from revue.config import Settings
from revue.errors import RevueError

if TYPE_CHECKING:
  from revue.platforms.base import PlatformAdapter


class PlatformNotFoundError(RevueError):
  """Requested platform has no adapter."""


PlatformFactory = Callable[[Settings], "PlatformAdapter"]

_platforms: dict[str, PlatformFactory] = {}


def register_platform(name: str, factory: PlatformFactory) -> None:
  """Register a platform adapter factory."""
  _platforms[name] = factory


def create_adapter(settings: Settings) -> "PlatformAdapter":
  """Create the adapter for ``settings.platform``."""
  PlatformRegistry.load_all()
  factory = _platforms.get(settings.platform)
  if factory is None:
    available = ", ".join(_platforms) or "none"
    raise PlatformNotFoundError(
      f"Unsupported platform: '{settings.platform}'. Available: {available}"
    )
  return factory(settings)


def list_platforms() -> list[str]:
  """List registered platform names."""
  return list(_platforms.keys())


class PlatformRegistry:
  """Registry for lazy adapter loading."""

  @staticmethod
  def load_all() -> None:
    """Load all adapter modules to trigger registration."""
    from revue.platforms import azure, bitbucket, github, local  # noqa: F401
