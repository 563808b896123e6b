"""Review outcome classification."""

from collections import Counter

from revue.models import CommentType, ReviewResult, ReviewStats, ReviewStatus


def classify(result: ReviewResult, fail_on_warnings: bool = False) -> ReviewStats:
  """Count comments per category and decide the review status.

  Changes are requested when there is at least one error, or when
  ``fail_on_warnings`` is set and there is at least one error or warning.
  Provenance plays no part.
  """
  counts = Counter(c.category for c in result.comments)
  errors = counts[CommentType.ERROR]
  warns = counts[CommentType.WARN]

  if errors or (fail_on_warnings and warns):
    status = ReviewStatus.CHANGES_REQUESTED
  else:
    status = ReviewStatus.APPROVED

  return ReviewStats(
    total=len(result.comments),
    errors=errors,
    warns=warns,
    tips=counts[CommentType.TIP],
    notes=counts[CommentType.NOTE],
    grammar=counts[CommentType.GRAMMAR],
    added_lines=result.raw_diff_stats.added_lines,
    ai_used=result.ai_used,
    status=status,
    has_issues=status == ReviewStatus.CHANGES_REQUESTED,
  )
