"""Core domain models for pull request review."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class CommentSource(Enum):
  """Where a comment came from."""

  HEURISTIC = "heuristic"
  AI = "ai"


class CommentType(Enum):
  """Comment categories, rendered as a leading [TYPE] tag."""

  ERROR = "ERROR"
  WARN = "WARN"
  TIP = "TIP"
  NOTE = "NOTE"
  GRAMMAR = "GRAMMAR"

  @property
  def tag(self) -> str:
    return f"[{self.value}]"


class ReviewStatus(Enum):
  """Review outcome reported to the platform."""

  APPROVED = "APPROVED"
  CHANGES_REQUESTED = "CHANGES_REQUESTED"
  COMMENTED = "COMMENTED"


class AIFailurePolicy(Enum):
  """What to do when the AI service call fails."""

  ABORT = "abort"
  DEGRADE = "degrade"


_TAG_PREFIX = re.compile(r"^\s*\[(ERROR|WARN|TIP|NOTE|GRAMMAR)\]", re.IGNORECASE)


def parse_tag(message: str) -> CommentType | None:
  """Return the category named by a leading [TYPE] tag, if any."""
  match = _TAG_PREFIX.match(message)
  if not match:
    return None
  return CommentType(match.group(1).upper())


@dataclass(frozen=True)
class ReviewComment:
  """A single review finding."""

  message: str
  source: CommentSource
  file: str | None = None
  line: int | None = None
  type: CommentType | None = None

  @property
  def category(self) -> CommentType | None:
    """Explicit type when known, otherwise the message's leading tag."""
    if self.type is not None:
      return self.type
    return parse_tag(self.message)

  @property
  def has_location(self) -> bool:
    return bool(self.file) and self.line is not None


@dataclass(frozen=True)
class DiffStats:
  """Line counts taken from the normalized diff."""

  added_lines: int
  total_lines: int


@dataclass(frozen=True)
class ReviewResult:
  """Outcome of one review pass."""

  comments: Sequence[ReviewComment]
  summary: str
  raw_diff_stats: DiffStats
  ai_used: bool


@dataclass(frozen=True)
class ReviewStats:
  """Per-category counts and the derived review status."""

  total: int
  errors: int
  warns: int
  tips: int
  notes: int
  grammar: int
  added_lines: int
  ai_used: bool
  status: ReviewStatus
  has_issues: bool
