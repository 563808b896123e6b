"""console-log and debugger-statement: leftover debugging aids."""

import re

from revue.rules.registry import register_rule


class ConsoleLogRule:
  """Flags console.log calls."""

  @property
  def id(self) -> str:
    return "console-log"

  @property
  def name(self) -> str:
    return "console.log call"

  def check(self, content: str) -> str | None:
    if "console.log" in content:
      return (
        "console.log found – remove or replace with a proper logger: "
        f"{content.strip()}"
      )
    return None


class DebuggerStatementRule:
  """Flags debugger statements, with or without a trailing semicolon."""

  PATTERN = re.compile(r"debugger;?")

  @property
  def id(self) -> str:
    return "debugger-statement"

  @property
  def name(self) -> str:
    return "debugger statement"

  def check(self, content: str) -> str | None:
    if self.PATTERN.search(content):
      return "debugger statement found – remove before merge."
    return None


def _create_console_log() -> ConsoleLogRule:
  return ConsoleLogRule()


def _create_debugger_statement() -> DebuggerStatementRule:
  return DebuggerStatementRule()


register_rule("console-log", _create_console_log)
register_rule("debugger-statement", _create_debugger_statement)
