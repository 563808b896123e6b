"""Posting review results back to the platform."""

import logging

from revue.config import Settings
from revue.models import ReviewResult, ReviewStatus
from revue.outcome import classify
from revue.output.summary import beautify_tag_prefix, format_markdown_summary
from revue.platforms.base import InlineCommenter, PlatformAdapter, StatusSetter

logger = logging.getLogger(__name__)


def post_review(adapter: PlatformAdapter, result: ReviewResult, settings: Settings) -> None:
  """Post the summary and inline comments.

  Every post is attempted independently. Any failure, including an
  unexpected response body, is logged and the remaining posts continue.
  """
  logger.info("Posting inline and summary comments...")

  try:
    adapter.post_comment(format_markdown_summary(result, settings))
    logger.info("Summary comment posted.")
  except Exception as e:
    logger.error("Failed to post summary comment: %s", e)

  if not isinstance(adapter, InlineCommenter):
    logger.debug("%s does not support inline comments", adapter.name)
    return

  for comment in result.comments:
    if not comment.has_location:
      continue
    try:
      adapter.post_inline_comment(comment.file, comment.line, beautify_tag_prefix(comment.message))
    except Exception as e:
      logger.warning("Failed to post inline comment at %s:%s: %s", comment.file, comment.line, e)


def set_status(
  adapter: PlatformAdapter,
  result: ReviewResult,
  settings: Settings,
) -> ReviewStatus | None:
  """Record the classified status on the platform when it supports it."""
  if not isinstance(adapter, StatusSetter):
    return None

  status = classify(result, settings.fail_on_warnings).status
  try:
    adapter.set_review_status(status, result.summary)
  except Exception as e:
    logger.warning("Failed to set PR review status: %s", e)
    return None

  logger.info("PR status set to %s", status.value)
  return status
