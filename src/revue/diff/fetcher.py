"""Diff retrieval through a platform adapter."""

import logging
from typing import TYPE_CHECKING

from revue.diff.normalizer import normalize_diff
from revue.errors import DiffFetchError

if TYPE_CHECKING:
  from revue.platforms.base import PlatformAdapter

logger = logging.getLogger(__name__)


def fetch_diff(adapter: "PlatformAdapter") -> str:
  """Fetch the pull request diff and normalize its line endings.

  Any failure raised by the adapter is wrapped in a DiffFetchError; a
  partial diff is never returned.
  """
  logger.debug("Fetching diff...")
  try:
    diff = adapter.get_diff()
  except Exception as e:
    raise DiffFetchError(f"Failed to fetch diff: {e}") from e

  logger.debug("Fetched diff (%d chars)", len(diff))
  return normalize_diff(diff)
