"""Azure DevOps pull requests over the Git REST API."""

import difflib
from typing import Any, Iterator

import httpx

from revue.config import Settings
from revue.models import ReviewStatus
from revue.platforms.base import PlatformAdapter, PlatformError, PullRequestMetadata
from revue.platforms.registry import register_platform

API_VERSION = "7.1"

_VOTES = {
  ReviewStatus.APPROVED: 10,
  ReviewStatus.CHANGES_REQUESTED: -5,
  ReviewStatus.COMMENTED: 0,
}

# Thread status "active", comment type "text".
_ACTIVE = 1
_TEXT = 1

_BINARY = object()


class AzureDevOpsAdapter(PlatformAdapter):
  """Azure DevOps adapter. ``repository`` is ``organization/project/repository``.

  Azure has no endpoint returning a unified diff, so the diff is rebuilt from
  the latest iteration's change list and the file contents at its common
  and source commits.
  """

  DEFAULT_API_BASE = "https://dev.azure.com"

  def __init__(self, settings: Settings, client: httpx.Client | None = None):
    parts = settings.repository.split("/")
    if len(parts) != 3 or not all(parts):
      raise PlatformError(
        f"Azure repository must be 'organization/project/repository', got '{settings.repository}'"
      )
    self._org, self._project, self._repo = parts
    self._number = settings.pull_request_id
    self._client = client or self._make_client(
      settings.api_base or self.DEFAULT_API_BASE,
      auth=("", settings.token),
    )

  @property
  def name(self) -> str:
    return "azure"

  @property
  def _repo_path(self) -> str:
    return f"/{self._org}/{self._project}/_apis/git/repositories/{self._repo}"

  @property
  def _pull_path(self) -> str:
    return f"{self._repo_path}/pullrequests/{self._number}"

  def _get(self, url: str, **params: Any) -> dict[str, Any]:
    response = self._client.get(url, params={"api-version": API_VERSION, **params})
    response.raise_for_status()
    return response.json()

  def _post(self, url: str, payload: dict[str, Any]) -> None:
    response = self._client.post(url, params={"api-version": API_VERSION}, json=payload)
    response.raise_for_status()

  # Diff

  def get_diff(self) -> str:
    iterations = self._get(f"{self._pull_path}/iterations").get("value", [])
    if not iterations:
      return ""
    latest = iterations[-1]
    source = _commit_id(latest, "sourceRefCommit")
    base = _commit_id(latest, "commonRefCommit") or _commit_id(latest, "targetRefCommit")
    if not source or not base:
      raise PlatformError(f"Iteration {latest.get('id')} is missing commit references")

    parts = [
      self._file_diff(entry, base, source)
      for entry in self._changes(latest["id"])
    ]
    return "".join(p for p in parts if p)

  def _changes(self, iteration_id: int) -> Iterator[dict[str, Any]]:
    skip = 0
    while True:
      page = self._get(
        f"{self._pull_path}/iterations/{iteration_id}/changes", **{"$skip": skip, "$top": 2000}
      )
      yield from page.get("changeEntries", [])
      next_skip = page.get("nextSkip") or 0
      if next_skip <= skip:
        return
      skip = next_skip

  def _file_diff(self, entry: dict[str, Any], base: str, source: str) -> str:
    item = entry.get("item") or {}
    if item.get("isFolder") or item.get("gitObjectType", "blob") != "blob":
      return ""

    path = item.get("path", "")
    original = entry.get("originalPath") or path
    change = entry.get("changeType", "edit")

    old = None if "add" in change else self._content(original, base)
    new = None if "delete" in change else self._content(path, source)

    header = f"diff --git a{original} b{path}\n"
    if old is _BINARY or new is _BINARY:
      return f"{header}Binary files differ\n"

    lines = difflib.unified_diff(
      (old or "").splitlines(),
      (new or "").splitlines(),
      fromfile=f"a{original}" if old is not None else "/dev/null",
      tofile=f"b{path}" if new is not None else "/dev/null",
      lineterm="",
    )
    body = "\n".join(lines)
    return f"{header}{body}\n" if body else ""

  def _content(self, path: str, commit: str) -> Any:
    data = self._get(
      f"{self._repo_path}/items",
      path=path,
      includeContent="true",
      **{
        "versionDescriptor.version": commit,
        "versionDescriptor.versionType": "commit",
        "$format": "json",
      },
    )
    if (data.get("contentMetadata") or {}).get("isBinary"):
      return _BINARY
    return data.get("content", "")

  # Comments and status

  def post_comment(self, message: str) -> None:
    self._post(f"{self._pull_path}/threads", {
      "comments": [{"parentCommentId": 0, "content": message, "commentType": _TEXT}],
      "status": _ACTIVE,
    })

  def post_inline_comment(self, file: str, line: int, message: str) -> None:
    position = {"line": line, "offset": 1}
    self._post(f"{self._pull_path}/threads", {
      "comments": [{"parentCommentId": 0, "content": message, "commentType": _TEXT}],
      "status": _ACTIVE,
      "threadContext": {
        "filePath": file if file.startswith("/") else f"/{file}",
        "rightFileStart": position,
        "rightFileEnd": position,
      },
    })

  def set_review_status(self, status: ReviewStatus, body: str | None = None) -> None:
    reviewer_id = self._authenticated_user_id()
    response = self._client.put(
      f"{self._pull_path}/reviewers/{reviewer_id}",
      params={"api-version": API_VERSION},
      json={"vote": _VOTES[status]},
    )
    response.raise_for_status()

  def _authenticated_user_id(self) -> str:
    response = self._client.get(f"/{self._org}/_apis/connectionData")
    response.raise_for_status()
    user_id = (response.json().get("authenticatedUser") or {}).get("id")
    if not user_id:
      raise PlatformError("Could not determine the authenticated Azure DevOps user")
    return user_id

  def get_pull_request_metadata(self) -> PullRequestMetadata:
    data = self._get(self._pull_path)
    return PullRequestMetadata(
      title=data.get("title", ""),
      author=(data.get("createdBy") or {}).get("displayName"),
    )

  def close(self) -> None:
    self._client.close()


def _commit_id(iteration: dict[str, Any], key: str) -> str | None:
  return (iteration.get(key) or {}).get("commitId")


def _create_azure(settings: Settings) -> PlatformAdapter:
  return AzureDevOpsAdapter(settings)


register_platform("azure", _create_azure)
