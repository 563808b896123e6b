"""AI-assisted review: prompt, one completion call, parsed comments."""

import logging
from typing import Any

from pydantic import ValidationError

from revue.config import Settings
from revue.errors import AIReviewError
from revue.models import AIFailurePolicy, CommentSource, CommentType, ReviewComment
from revue.providers import ProviderRegistry, get_provider
from revue.providers.base import CompletionRequest, CompletionService
from revue.providers.parser import MalformedResponseError
from revue.providers.prompt import build_system_prompt, build_user_prompt, enabled_focus
from revue.providers.schema import SCHEMA_NAME, AIComment, review_json_schema

logger = logging.getLogger(__name__)


class AIReviewer:
  """Turns a diff into AI review comments through a CompletionService.

  Exactly one completion call is made per review. When no service is given
  it is looked up in the provider registry on first use. A failure to look
  it up or to call it is handled per ``settings.ai_failure_policy``:

  - ``abort``: raise AIReviewError.
  - ``degrade``: return a single ``[ERROR] AI review failed: ...`` comment.

  A reply that is not JSON, or has no ``comments`` array, counts as an
  empty review rather than a failure.
  """

  def __init__(self, service: CompletionService | None, settings: Settings):
    self._service = service
    self._settings = settings

  @property
  def service(self) -> CompletionService | None:
    return self._service

  def _get_service(self) -> CompletionService:
    if self._service is None:
      ProviderRegistry.load_all()
      self._service = get_provider(
        self._settings.ai_provider,
        self._settings.ai_model,
        self._settings.ai_api_key,
      )
    return self._service

  def build_request(self, diff: str) -> CompletionRequest:
    """Assemble the completion request for a diff."""
    return CompletionRequest(
      system=build_system_prompt(enabled_focus(self._settings)),
      user=build_user_prompt(diff),
      schema_name=SCHEMA_NAME,
      schema=review_json_schema(),
      temperature=self._settings.ai_temperature,
      max_tokens=self._settings.ai_max_tokens,
    )

  def review(self, diff: str) -> list[ReviewComment]:
    request = self.build_request(diff)

    try:
      service = self._get_service()
      logger.debug("Calling %s/%s with structured output...", service.name, service.model)
      data = service.complete(request)
    except MalformedResponseError as e:
      logger.warning("AI response was not valid JSON, treating as empty: %s", e)
      return []
    except Exception as e:
      return self._handle_failure(e)

    comments = parse_comments(data)
    logger.debug("AI returned %d structured comments", len(comments))
    return comments

  def _handle_failure(self, error: Exception) -> list[ReviewComment]:
    logger.debug("AI structured review failed", exc_info=error)
    reason = str(error) or type(error).__name__

    if self._settings.ai_failure_policy == AIFailurePolicy.DEGRADE:
      logger.warning("AI review failed, continuing without AI findings: %s", reason)
      return [ReviewComment(
        message=f"{CommentType.ERROR.tag} AI review failed: {reason}",
        source=CommentSource.AI,
        type=CommentType.ERROR,
      )]

    raise AIReviewError(f"AI review failed: {reason}") from error


def parse_comments(data: Any) -> list[ReviewComment]:
  """Convert a structured AI response into review comments.

  Items that do not match the schema are dropped one by one. Each message
  is trimmed and made to start with the tag of its declared type.
  """
  items = data.get("comments") if isinstance(data, dict) else None
  if not isinstance(items, list):
    logger.warning("AI response missing valid 'comments' array, treating as empty")
    return []

  comments: list[ReviewComment] = []
  for item in items:
    try:
      parsed = AIComment.model_validate(item)
    except ValidationError as e:
      logger.warning("Dropping malformed AI comment: %s", e.errors()[0]["msg"])
      continue

    message = _with_tag(parsed.type, parsed.message)
    if message is None:
      continue

    file = parsed.file.strip() if parsed.file else ""
    line = parsed.line if parsed.line and parsed.line > 0 else None

    comments.append(ReviewComment(
      message=message,
      source=CommentSource.AI,
      file=file or None,
      line=line if file else None,
      type=parsed.type,
    ))

  return comments


def _with_tag(comment_type: CommentType, message: str) -> str | None:
  """Trim the message and replace any leading tag with the type's tag."""
  body = message.strip()
  if body.startswith("[") and "]" in body:
    tag, _, rest = body.partition("]")
    if tag[1:].upper() in CommentType.__members__:
      body = rest.strip()
  if not body:
    return None
  return f"{comment_type.tag} {body}"
