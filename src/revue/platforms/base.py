"""Platform adapter interface and optional capabilities."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from revue.errors import RevueError
from revue.models import ReviewStatus


class PlatformError(RevueError):
  """Platform API returned an unusable response."""


@dataclass(frozen=True)
class PullRequestMetadata:
  """Basic pull request facts."""

  title: str
  author: str | None = None


class PlatformAdapter(ABC):
  """Source-control platform seen from the review pipeline.

  Only diff retrieval and summary comments are required. Inline comments,
  review status and metadata are optional capabilities described by the
  protocols below; check with ``isinstance`` before calling them.
  """

  USER_AGENT = "revue"
  TIMEOUT = 30.0

  @property
  @abstractmethod
  def name(self) -> str:
    """Platform name."""
    ...

  @abstractmethod
  def get_diff(self) -> str:
    """Return the pull request's unified diff."""
    ...

  @abstractmethod
  def post_comment(self, message: str) -> None:
    """Post a top-level comment on the pull request."""
    ...

  def close(self) -> None:
    """Release network resources."""

  @classmethod
  def _make_client(cls, base_url: str, **kwargs) -> httpx.Client:
    headers = {"User-Agent": cls.USER_AGENT, **kwargs.pop("headers", {})}
    return httpx.Client(base_url=base_url, headers=headers, timeout=cls.TIMEOUT, **kwargs)


@runtime_checkable
class InlineCommenter(Protocol):
  """Adapter can attach a comment to a file line."""

  def post_inline_comment(self, file: str, line: int, message: str) -> None:
    ...


@runtime_checkable
class StatusSetter(Protocol):
  """Adapter can record an approve / request-changes review."""

  def set_review_status(self, status: ReviewStatus, body: str | None = None) -> None:
    ...


@runtime_checkable
class MetadataProvider(Protocol):
  """Adapter can describe the pull request."""

  def get_pull_request_metadata(self) -> PullRequestMetadata:
    ...
