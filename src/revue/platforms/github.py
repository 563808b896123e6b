"""GitHub pull requests over the REST API."""

from typing import Any

import httpx

from revue.config import Settings
from revue.models import ReviewStatus
from revue.platforms.base import PlatformAdapter, PlatformError, PullRequestMetadata
from revue.platforms.registry import register_platform

_EVENTS = {
  ReviewStatus.APPROVED: "APPROVE",
  ReviewStatus.CHANGES_REQUESTED: "REQUEST_CHANGES",
  ReviewStatus.COMMENTED: "COMMENT",
}

JSON_ACCEPT = "application/vnd.github+json"
DIFF_ACCEPT = "application/vnd.github.v3.diff"


class GitHubAdapter(PlatformAdapter):
  """GitHub adapter with inline comments, reviews and metadata."""

  DEFAULT_API_BASE = "https://api.github.com"
  API_VERSION = "2022-11-28"

  def __init__(self, settings: Settings, client: httpx.Client | None = None):
    self._repo = settings.repository
    self._number = settings.pull_request_id
    self._client = client or self._make_client(
      settings.api_base or self.DEFAULT_API_BASE,
      headers={
        "Authorization": f"token {settings.token}",
        "X-GitHub-Api-Version": self.API_VERSION,
      },
    )
    self._pull: dict[str, Any] | None = None

  @property
  def name(self) -> str:
    return "github"

  @property
  def _pull_path(self) -> str:
    return f"/repos/{self._repo}/pulls/{self._number}"

  def _get_pull(self) -> dict[str, Any]:
    if self._pull is None:
      response = self._client.get(self._pull_path, headers={"Accept": JSON_ACCEPT})
      response.raise_for_status()
      self._pull = response.json()
    return self._pull

  def _head_sha(self) -> str:
    try:
      return self._get_pull()["head"]["sha"]
    except (KeyError, TypeError) as e:
      raise PlatformError(f"Pull request {self._number} has no head commit") from e

  def get_diff(self) -> str:
    response = self._client.get(self._pull_path, headers={"Accept": DIFF_ACCEPT})
    response.raise_for_status()
    return response.text

  def post_comment(self, message: str) -> None:
    response = self._client.post(
      f"/repos/{self._repo}/issues/{self._number}/comments",
      json={"body": message},
      headers={"Accept": JSON_ACCEPT},
    )
    response.raise_for_status()

  def post_inline_comment(self, file: str, line: int, message: str) -> None:
    response = self._client.post(
      f"{self._pull_path}/comments",
      json={
        "body": message,
        "commit_id": self._head_sha(),
        "path": file,
        "line": line,
        "side": "RIGHT",
      },
      headers={"Accept": JSON_ACCEPT},
    )
    response.raise_for_status()

  def set_review_status(self, status: ReviewStatus, body: str | None = None) -> None:
    event = _EVENTS[status]
    payload: dict[str, Any] = {"event": event, "commit_id": self._head_sha()}
    # GitHub rejects REQUEST_CHANGES and COMMENT reviews without a body.
    if body or event != "APPROVE":
      payload["body"] = body or "Requested changes."

    response = self._client.post(
      f"{self._pull_path}/reviews", json=payload, headers={"Accept": JSON_ACCEPT}
    )
    response.raise_for_status()

  def get_pull_request_metadata(self) -> PullRequestMetadata:
    pull = self._get_pull()
    return PullRequestMetadata(
      title=pull.get("title", ""),
      author=(pull.get("user") or {}).get("login"),
    )

  def close(self) -> None:
    self._client.close()


def _create_github(settings: Settings) -> PlatformAdapter:
  return GitHubAdapter(settings)


register_platform("github", _create_github)
