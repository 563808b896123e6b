"""Git command helpers."""

import subprocess
from pathlib import Path

from revue.errors import RevueError


class GitError(RevueError):
  """Git command failed."""


def _sanitize_error(stderr: str) -> str:
  """Remove potentially sensitive path information from error messages."""
  lines = stderr.strip().split("\n")
  sanitized = []
  for line in lines:
    if "fatal:" in line or "error:" in line:
      sanitized.append(line.split("/")[-1] if "/" in line else line)
    else:
      sanitized.append(line)
  return "\n".join(sanitized)


def run_git(*args: str, cwd: Path | None = None) -> str:
  """Run a git command and return stdout."""
  try:
    result = subprocess.run(
      ["git", *args],
      capture_output=True,
      text=True,
      check=True,
      cwd=cwd,
    )
    return result.stdout
  except FileNotFoundError as e:
    raise GitError("git executable not found") from e
  except subprocess.CalledProcessError as e:
    sanitized = _sanitize_error(e.stderr)
    raise GitError(f"git {' '.join(args)} failed: {sanitized}") from e


def branch_diff(base: str, cwd: Path | None = None) -> str:
  """Diff of HEAD against its merge base with ``base``."""
  return run_git("diff", f"{base}...HEAD", cwd=cwd)
