"""Diff retrieval and normalization."""

from revue.diff.fetcher import fetch_diff
from revue.diff.git import GitError, branch_diff, run_git
from revue.diff.normalizer import count_lines, normalize_diff

__all__ = [
  "GitError",
  "branch_diff",
  "count_lines",
  "fetch_diff",
  "normalize_diff",
  "run_git",
]
