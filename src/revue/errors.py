"""Exception hierarchy."""


class RevueError(Exception):
  """Base class for review failures."""


class ConfigError(RevueError):
  """Configuration is missing or invalid."""


class DiffFetchError(RevueError):
  """Diff could not be retrieved from the platform."""


class AIReviewError(RevueError):
  """AI review call failed."""
