"""Local working tree: diff from git, comments to the log."""

import logging
from pathlib import Path

from revue.config import Settings
from revue.diff.git import branch_diff
from revue.platforms.base import PlatformAdapter
from revue.platforms.registry import register_platform

logger = logging.getLogger(__name__)


class LocalGitAdapter(PlatformAdapter):
  """Reviews ``base_ref...HEAD`` of the current repository."""

  def __init__(self, settings: Settings, cwd: Path | None = None):
    self._base = settings.base_ref
    self._cwd = cwd

  @property
  def name(self) -> str:
    return "local"

  def get_diff(self) -> str:
    return branch_diff(self._base, cwd=self._cwd)

  def post_comment(self, message: str) -> None:
    logger.info("Review comment:\n%s", message)


def _create_local(settings: Settings) -> PlatformAdapter:
  return LocalGitAdapter(settings)


register_platform("local", _create_local)
