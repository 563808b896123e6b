"""Core review orchestration."""

import logging
from typing import TYPE_CHECKING, Sequence

from revue.config import Settings
from revue.diff import count_lines, fetch_diff
from revue.models import DiffStats, ReviewComment, ReviewResult
from revue.providers import CompletionService
from revue.reviewer import AIReviewer
from revue.rules import RuleEngine

if TYPE_CHECKING:
  from revue.platforms.base import PlatformAdapter

logger = logging.getLogger(__name__)


def merge_comments(
  heuristic: Sequence[ReviewComment],
  ai: Sequence[ReviewComment],
  max_comments: int,
) -> list[ReviewComment]:
  """Heuristic comments first, then AI comments with a new message, capped.

  Deduplication is by exact message text and only checks AI comments
  against what has already been accumulated.
  """
  merged = list(heuristic)
  seen = {c.message for c in merged}
  for comment in ai:
    if comment.message not in seen:
      merged.append(comment)
      seen.add(comment.message)
  return merged[:max_comments]


def build_summary(shown: int, heuristic_count: int, ai_count: int, ai_used: bool) -> str:
  """One-line count breakdown."""
  breakdown = f"Heuristic {heuristic_count}"
  if ai_used:
    breakdown += f" + AI {ai_count}"
  return f"Comments: {shown} ({breakdown})"


class ReviewOrchestrator:
  """Runs the heuristic scan and the AI review over a diff and merges them."""

  def __init__(
    self,
    settings: Settings | None = None,
    service: CompletionService | None = None,
    engine: RuleEngine | None = None,
  ):
    self.settings = settings or Settings(platform="local", ai_enabled=False)
    self._service = service
    self._engine = engine or RuleEngine(flag_any_type=self.settings.flag_any_type)

  def review(self, diff: str) -> ReviewResult:
    """Review a normalized diff."""
    scan = self._engine.scan(diff)
    logger.debug(
      "Heuristic scan: %d comments over %d added lines", len(scan.comments), scan.added_lines
    )

    ai_comments: list[ReviewComment] = []
    ai_used = False
    if self.settings.ai_enabled:
      ai_used = True
      ai_comments = AIReviewer(self._service, self.settings).review(diff)

    comments = merge_comments(scan.comments, ai_comments, self.settings.max_comments)

    return ReviewResult(
      comments=comments,
      summary=build_summary(len(comments), len(scan.comments), len(ai_comments), ai_used),
      raw_diff_stats=DiffStats(
        added_lines=scan.added_lines,
        total_lines=count_lines(diff),
      ),
      ai_used=ai_used,
    )


def run_review(
  adapter: "PlatformAdapter",
  settings: Settings,
  service: CompletionService | None = None,
) -> ReviewResult:
  """Fetch the pull request diff and review it."""
  logger.info("Fetching PR diff...")
  diff = fetch_diff(adapter)

  logger.info("Running review...")
  return ReviewOrchestrator(settings, service=service).review(diff)
