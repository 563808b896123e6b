"""Diff text normalization."""


def normalize_diff(diff: str) -> str:
  """Convert CRLF line endings to LF. Nothing else is touched."""
  return diff.replace("\r\n", "\n")


def count_lines(diff: str) -> int:
  """Count lines the same way the scanner splits them."""
  return len(diff.split("\n"))
