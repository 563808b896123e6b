"""Tests for platform adapters, driven through httpx mock transports."""

import json
from typing import Callable

import httpx
import pytest
from revue.config import Settings
from revue.models import ReviewStatus
from revue.platforms import (
  InlineCommenter,
  MetadataProvider,
  PlatformError,
  PlatformNotFoundError,
  StatusSetter,
  create_adapter,
  list_platforms,
)
from revue.platforms.azure import AzureDevOpsAdapter
from revue.platforms.bitbucket import BitbucketAdapter
from revue.platforms.github import GitHubAdapter
from revue.platforms.local import LocalGitAdapter

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
  """Collects requests and answers them through a route function."""

  def __init__(self, route: Handler):
    self.route = route
    self.requests: list[httpx.Request] = []

  def __call__(self, request: httpx.Request) -> httpx.Response:
    self.requests.append(request)
    return self.route(request)

  def client(self, base_url: str) -> httpx.Client:
    return httpx.Client(base_url=base_url, transport=httpx.MockTransport(self))

  def bodies(self, method: str) -> list[dict]:
    return [json.loads(r.content) for r in self.requests if r.method == method]


def _settings(platform: str, repository: str) -> Settings:
  return Settings(
    platform=platform,
    repository=repository,
    pull_request_id="7",
    token="tok",
    ai_enabled=False,
  )


class TestGitHubAdapter:
  PULL = {"title": "Add widgets", "user": {"login": "octocat"}, "head": {"sha": "abc123"}}

  def _route(self, request: httpx.Request) -> httpx.Response:
    if request.method == "GET" and request.url.path == "/repos/octo/widgets/pulls/7":
      if request.headers["Accept"] == "application/vnd.github.v3.diff":
        return httpx.Response(200, text="diff --git a/x b/x\n+y\n")
      return httpx.Response(200, json=self.PULL)
    if request.method == "POST":
      return httpx.Response(201, json={})
    return httpx.Response(404)

  @pytest.fixture
  def recorder(self) -> Recorder:
    return Recorder(self._route)

  @pytest.fixture
  def adapter(self, recorder: Recorder) -> GitHubAdapter:
    return GitHubAdapter(
      _settings("github", "octo/widgets"), client=recorder.client("https://api.github.com")
    )

  def test_capabilities(self, adapter: GitHubAdapter) -> None:
    assert adapter.name == "github"
    assert isinstance(adapter, InlineCommenter)
    assert isinstance(adapter, StatusSetter)
    assert isinstance(adapter, MetadataProvider)

  def test_get_diff(self, adapter: GitHubAdapter) -> None:
    assert adapter.get_diff() == "diff --git a/x b/x\n+y\n"

  def test_post_comment(self, adapter: GitHubAdapter, recorder: Recorder) -> None:
    adapter.post_comment("hello")

    assert recorder.requests[-1].url.path == "/repos/octo/widgets/issues/7/comments"
    assert recorder.bodies("POST") == [{"body": "hello"}]

  def test_inline_comment_uses_head_sha(self, adapter: GitHubAdapter, recorder: Recorder) -> None:
    adapter.post_inline_comment("src/a.py", 12, "msg")

    assert recorder.requests[-1].url.path == "/repos/octo/widgets/pulls/7/comments"
    assert recorder.bodies("POST") == [{
      "body": "msg", "commit_id": "abc123", "path": "src/a.py", "line": 12, "side": "RIGHT",
    }]

  def test_pull_fetched_once(self, adapter: GitHubAdapter, recorder: Recorder) -> None:
    adapter.post_inline_comment("a.py", 1, "one")
    adapter.post_inline_comment("a.py", 2, "two")

    assert sum(1 for r in recorder.requests if r.method == "GET") == 1

  @pytest.mark.parametrize("status,event", [
    (ReviewStatus.APPROVED, "APPROVE"),
    (ReviewStatus.CHANGES_REQUESTED, "REQUEST_CHANGES"),
    (ReviewStatus.COMMENTED, "COMMENT"),
  ])
  def test_review_events(self, adapter, recorder, status, event) -> None:
    adapter.set_review_status(status, "summary")

    body = recorder.bodies("POST")[0]
    assert recorder.requests[-1].url.path == "/repos/octo/widgets/pulls/7/reviews"
    assert body["event"] == event
    assert body["body"] == "summary"

  def test_request_changes_gets_default_body(self, adapter, recorder) -> None:
    adapter.set_review_status(ReviewStatus.CHANGES_REQUESTED)
    assert recorder.bodies("POST")[0]["body"] == "Requested changes."

  def test_approve_without_body(self, adapter, recorder) -> None:
    adapter.set_review_status(ReviewStatus.APPROVED)
    assert "body" not in recorder.bodies("POST")[0]

  def test_metadata(self, adapter: GitHubAdapter) -> None:
    metadata = adapter.get_pull_request_metadata()
    assert metadata.title == "Add widgets"
    assert metadata.author == "octocat"

  def test_http_error_raises(self) -> None:
    recorder = Recorder(lambda request: httpx.Response(403))
    adapter = GitHubAdapter(
      _settings("github", "octo/widgets"), client=recorder.client("https://api.github.com")
    )
    with pytest.raises(httpx.HTTPStatusError):
      adapter.get_diff()

  def test_missing_head_sha(self) -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"title": "x"}))
    adapter = GitHubAdapter(
      _settings("github", "octo/widgets"), client=recorder.client("https://api.github.com")
    )
    with pytest.raises(PlatformError, match="no head commit"):
      adapter.post_inline_comment("a.py", 1, "m")

  def test_default_client_headers(self) -> None:
    adapter = GitHubAdapter(_settings("github", "octo/widgets"))
    try:
      assert adapter._client.headers["Authorization"] == "token tok"
      assert adapter._client.headers["User-Agent"] == "revue"
      assert str(adapter._client.base_url).startswith("https://api.github.com")
    finally:
      adapter.close()


class TestBitbucketAdapter:
  BASE = "https://api.bitbucket.org/2.0"
  PULL = "/2.0/repositories/team/repo/pullrequests/7"

  def _route(self, request: httpx.Request) -> httpx.Response:
    if request.url.path == f"{self.PULL}/diff":
      return httpx.Response(200, text="diff --git a/b b/b\n")
    if request.method == "GET" and request.url.path == self.PULL:
      return httpx.Response(200, json={"title": "Fix", "author": {"display_name": "Ana"}})
    return httpx.Response(200, json={})

  @pytest.fixture
  def recorder(self) -> Recorder:
    return Recorder(self._route)

  @pytest.fixture
  def adapter(self, recorder: Recorder) -> BitbucketAdapter:
    return BitbucketAdapter(_settings("bitbucket", "team/repo"), client=recorder.client(self.BASE))

  def test_get_diff(self, adapter: BitbucketAdapter) -> None:
    assert adapter.get_diff() == "diff --git a/b b/b\n"

  def test_comments(self, adapter: BitbucketAdapter, recorder: Recorder) -> None:
    adapter.post_comment("summary")
    adapter.post_inline_comment("src/b.py", 4, "inline")

    assert recorder.bodies("POST") == [
      {"content": {"raw": "summary"}},
      {"content": {"raw": "inline"}, "inline": {"path": "src/b.py", "to": 4}},
    ]
    assert all(r.url.path == f"{self.PULL}/comments" for r in recorder.requests)

  def test_status_actions(self, adapter: BitbucketAdapter, recorder: Recorder) -> None:
    adapter.set_review_status(ReviewStatus.APPROVED)
    adapter.set_review_status(ReviewStatus.CHANGES_REQUESTED)
    adapter.set_review_status(ReviewStatus.COMMENTED)

    assert [r.url.path for r in recorder.requests] == [
      f"{self.PULL}/approve",
      f"{self.PULL}/request-changes",
    ]

  def test_metadata(self, adapter: BitbucketAdapter) -> None:
    assert adapter.get_pull_request_metadata().author == "Ana"


class TestAzureDevOpsAdapter:
  BASE = "https://dev.azure.com"
  REPO = "/org/proj/_apis/git/repositories/repo"
  PULL = f"{REPO}/pullrequests/7"

  FILES = {
    ("/app.py", "base"): "x = 1\ny = 2\n",
    ("/app.py", "head"): "x = 2\ny = 2\n",
    ("/new.py", "head"): "print(1)\n",
    ("/old.py", "base"): "gone\n",
  }

  def _route(self, request: httpx.Request) -> httpx.Response:
    path = request.url.path
    params = request.url.params
    if path == f"{self.PULL}/iterations":
      return httpx.Response(200, json={"value": [
        {"id": 1, "sourceRefCommit": {"commitId": "old"}, "commonRefCommit": {"commitId": "x"}},
        {"id": 2, "sourceRefCommit": {"commitId": "head"}, "commonRefCommit": {"commitId": "base"}},
      ]})
    if path == f"{self.PULL}/iterations/2/changes":
      if params.get("$skip") == "0":
        return httpx.Response(200, json={"changeEntries": [
          {"item": {"path": "/app.py", "gitObjectType": "blob"}, "changeType": "edit"},
          {"item": {"path": "/dir", "isFolder": True}, "changeType": "add"},
          {"item": {"path": "/new.py", "gitObjectType": "blob"}, "changeType": "add"},
        ], "nextSkip": 3})
      return httpx.Response(200, json={"changeEntries": [
        {"item": {"path": "/old.py", "gitObjectType": "blob"}, "changeType": "delete"},
      ], "nextSkip": 0})
    if path == f"{self.REPO}/items":
      key = (params["path"], params["versionDescriptor.version"])
      if key == ("/logo.png", "head"):
        return httpx.Response(200, json={"contentMetadata": {"isBinary": True}})
      return httpx.Response(200, json={"content": self.FILES[key]})
    if path == "/org/_apis/connectionData":
      return httpx.Response(200, json={"authenticatedUser": {"id": "user-1"}})
    if request.method == "GET" and path == self.PULL:
      return httpx.Response(200, json={"title": "T", "createdBy": {"displayName": "Bo"}})
    return httpx.Response(200, json={})

  @pytest.fixture
  def recorder(self) -> Recorder:
    return Recorder(self._route)

  @pytest.fixture
  def adapter(self, recorder: Recorder) -> AzureDevOpsAdapter:
    return AzureDevOpsAdapter(_settings("azure", "org/proj/repo"), client=recorder.client(self.BASE))

  def test_repository_shape_checked(self) -> None:
    with pytest.raises(PlatformError, match="organization/project/repository"):
      AzureDevOpsAdapter(_settings("azure", "org/repo"))

  def test_diff_rebuilt_from_latest_iteration(self, adapter: AzureDevOpsAdapter) -> None:
    diff = adapter.get_diff()

    assert "diff --git a/app.py b/app.py\n--- a/app.py\n+++ b/app.py\n" in diff
    assert "-x = 1\n+x = 2\n" in diff
    assert "diff --git a/new.py b/new.py\n--- /dev/null\n+++ b/new.py\n" in diff
    assert "+print(1)\n" in diff
    assert "+++ /dev/null\n@@ -1 +0,0 @@\n-gone\n" in diff
    assert "/dir" not in diff

  def test_api_version_sent(self, adapter: AzureDevOpsAdapter, recorder: Recorder) -> None:
    adapter.get_diff()
    assert all(r.url.params.get("api-version") == "7.1" for r in recorder.requests)

  def test_binary_file(self, recorder: Recorder) -> None:
    base_route = recorder.route

    def route(request: httpx.Request) -> httpx.Response:
      if request.url.path.endswith("/iterations/2/changes"):
        return httpx.Response(200, json={"changeEntries": [
          {"item": {"path": "/logo.png"}, "changeType": "add"},
        ]})
      return base_route(request)

    recorder.route = route
    adapter = AzureDevOpsAdapter(
      _settings("azure", "org/proj/repo"), client=recorder.client(self.BASE)
    )
    assert adapter.get_diff() == "diff --git a/logo.png b/logo.png\nBinary files differ\n"

  def test_no_iterations(self) -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"value": []}))
    adapter = AzureDevOpsAdapter(
      _settings("azure", "org/proj/repo"), client=recorder.client(self.BASE)
    )
    assert adapter.get_diff() == ""

  def test_threads(self, adapter: AzureDevOpsAdapter, recorder: Recorder) -> None:
    adapter.post_comment("summary")
    adapter.post_inline_comment("src/a.py", 5, "inline")

    general, inline = recorder.bodies("POST")
    assert general["comments"][0]["content"] == "summary"
    assert general["status"] == 1
    assert "threadContext" not in general
    assert inline["threadContext"]["filePath"] == "/src/a.py"
    assert inline["threadContext"]["rightFileStart"] == {"line": 5, "offset": 1}
    assert all(r.url.path == f"{self.PULL}/threads" for r in recorder.requests)

  @pytest.mark.parametrize("status,vote", [
    (ReviewStatus.APPROVED, 10),
    (ReviewStatus.CHANGES_REQUESTED, -5),
    (ReviewStatus.COMMENTED, 0),
  ])
  def test_vote(self, adapter, recorder, status, vote) -> None:
    adapter.set_review_status(status)

    put = recorder.requests[-1]
    assert put.method == "PUT"
    assert put.url.path == f"{self.PULL}/reviewers/user-1"
    assert json.loads(put.content) == {"vote": vote}

  def test_metadata(self, adapter: AzureDevOpsAdapter) -> None:
    metadata = adapter.get_pull_request_metadata()
    assert (metadata.title, metadata.author) == ("T", "Bo")


class TestLocalGitAdapter:
  def test_diff_against_base_ref(self, monkeypatch) -> None:
    calls = []

    def fake_branch_diff(base, cwd=None):
      calls.append((base, cwd))
      return "+local\n"

    monkeypatch.setattr("revue.platforms.local.branch_diff", fake_branch_diff)
    settings = Settings(platform="local", ai_enabled=False, base_ref="develop")

    assert LocalGitAdapter(settings).get_diff() == "+local\n"
    assert calls == [("develop", None)]

  def test_no_optional_capabilities(self, settings) -> None:
    adapter = LocalGitAdapter(settings)
    assert not isinstance(adapter, InlineCommenter)
    assert not isinstance(adapter, StatusSetter)


class TestCreateAdapter:
  def test_builtin_platforms(self) -> None:
    create_adapter(Settings(platform="local", ai_enabled=False))
    assert {"github", "bitbucket", "azure", "local"} <= set(list_platforms())

  def test_local(self, settings) -> None:
    assert isinstance(create_adapter(settings), LocalGitAdapter)

  def test_github(self, remote_settings) -> None:
    adapter = create_adapter(remote_settings)
    try:
      assert isinstance(adapter, GitHubAdapter)
    finally:
      adapter.close()

  def test_unknown_platform(self) -> None:
    with pytest.raises(PlatformNotFoundError, match="Unsupported platform: 'gitlab'"):
      create_adapter(Settings.model_construct(platform="gitlab"))
