"""Bitbucket Cloud pull requests over the 2.0 REST API."""

from typing import Any

import httpx

from revue.config import Settings
from revue.models import ReviewStatus
from revue.platforms.base import PlatformAdapter, PullRequestMetadata
from revue.platforms.registry import register_platform

_STATUS_ACTIONS = {
  ReviewStatus.APPROVED: "approve",
  ReviewStatus.CHANGES_REQUESTED: "request-changes",
}


class BitbucketAdapter(PlatformAdapter):
  """Bitbucket Cloud adapter. ``repository`` is ``workspace/repo_slug``."""

  DEFAULT_API_BASE = "https://api.bitbucket.org/2.0"

  def __init__(self, settings: Settings, client: httpx.Client | None = None):
    self._repo = settings.repository
    self._number = settings.pull_request_id
    self._client = client or self._make_client(
      settings.api_base or self.DEFAULT_API_BASE,
      headers={"Authorization": f"Bearer {settings.token}"},
      follow_redirects=True,
    )

  @property
  def name(self) -> str:
    return "bitbucket"

  @property
  def _pull_path(self) -> str:
    return f"/repositories/{self._repo}/pullrequests/{self._number}"

  def get_diff(self) -> str:
    response = self._client.get(f"{self._pull_path}/diff")
    response.raise_for_status()
    return response.text

  def _comment(self, payload: dict[str, Any]) -> None:
    response = self._client.post(f"{self._pull_path}/comments", json=payload)
    response.raise_for_status()

  def post_comment(self, message: str) -> None:
    self._comment({"content": {"raw": message}})

  def post_inline_comment(self, file: str, line: int, message: str) -> None:
    self._comment({"content": {"raw": message}, "inline": {"path": file, "to": line}})

  def set_review_status(self, status: ReviewStatus, body: str | None = None) -> None:
    action = _STATUS_ACTIONS.get(status)
    if action is None:
      # Bitbucket has no neutral review state; the summary comment stands alone.
      return
    response = self._client.post(f"{self._pull_path}/{action}")
    response.raise_for_status()

  def get_pull_request_metadata(self) -> PullRequestMetadata:
    response = self._client.get(self._pull_path)
    response.raise_for_status()
    data = response.json()
    return PullRequestMetadata(
      title=data.get("title", ""),
      author=(data.get("author") or {}).get("display_name"),
    )

  def close(self) -> None:
    self._client.close()


def _create_bitbucket(settings: Settings) -> PlatformAdapter:
  return BitbucketAdapter(settings)


register_platform("bitbucket", _create_bitbucket)
