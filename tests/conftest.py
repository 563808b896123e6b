"""Pytest fixtures."""

from typing import Any

import pytest
from revue.config import Settings
from revue.models import (
  CommentSource,
  CommentType,
  DiffStats,
  ReviewComment,
  ReviewResult,
)
from revue.providers.base import CompletionRequest, CompletionService


class FakeService(CompletionService):
  """Completion service returning canned data, or raising."""

  def __init__(self, response: Any = None, error: Exception | None = None):
    self.response = response if response is not None else {"comments": []}
    self.error = error
    self.requests: list[CompletionRequest] = []

  @property
  def name(self) -> str:
    return "fake"

  @property
  def model(self) -> str:
    return "fake-model"

  def is_available(self) -> bool:
    return True

  def complete(self, request: CompletionRequest) -> Any:
    self.requests.append(request)
    if self.error is not None:
      raise self.error
    return self.response


@pytest.fixture
def fake_service() -> type[FakeService]:
  return FakeService


@pytest.fixture
def sample_diff() -> str:
  return """diff --git a/src/app.ts b/src/app.ts
index 1234567..abcdefg 100644
--- a/src/app.ts
+++ b/src/app.ts
@@ -1,3 +1,5 @@
 import x from "y";
-const a = 1;
+const a: any = 1;
+console.log(a);
+// TODO: remove
"""


@pytest.fixture
def settings() -> Settings:
  return Settings(platform="local", ai_enabled=False)


@pytest.fixture
def ai_settings() -> Settings:
  return Settings(platform="local", ai_api_key="test-key")


@pytest.fixture
def remote_settings() -> Settings:
  return Settings(
    platform="github",
    repository="octo/widgets",
    pull_request_id="7",
    token="gh-token",
    ai_enabled=False,
  )


@pytest.fixture
def sample_review_result() -> ReviewResult:
  return ReviewResult(
    comments=[
      ReviewComment(
        message="Avoid TODOs in production code: // TODO: remove",
        source=CommentSource.HEURISTIC,
      ),
      ReviewComment(
        message="[ERROR] Possible null dereference.",
        source=CommentSource.AI,
        file="src/app.ts",
        line=3,
        type=CommentType.ERROR,
      ),
      ReviewComment(
        message="[TIP] Extract this into a helper.",
        source=CommentSource.AI,
        file="src/app.ts",
        type=CommentType.TIP,
      ),
    ],
    summary="Comments: 3 (Heuristic 1 + AI 2)",
    raw_diff_stats=DiffStats(added_lines=3, total_lines=10),
    ai_used=True,
  )


@pytest.fixture
def empty_review_result() -> ReviewResult:
  return ReviewResult(
    comments=[],
    summary="Comments: 0 (Heuristic 0)",
    raw_diff_stats=DiffStats(added_lines=0, total_lines=1),
    ai_used=False,
  )
