"""Logging setup on a stderr rich console."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "revue"


def setup_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
  """Route the package logger through rich on stderr."""
  logger = logging.getLogger(LOGGER_NAME)
  logger.setLevel(level.upper())
  logger.handlers.clear()

  handler = RichHandler(
    console=console or Console(stderr=True),
    show_path=False,
    log_time_format="%H:%M:%S",
    markup=False,
  )
  handler.setFormatter(logging.Formatter("%(message)s"))
  logger.addHandler(handler)
  return logger
