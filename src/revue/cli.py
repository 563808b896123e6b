"""CLI interface using Typer."""

import logging
import os
import traceback
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from revue import __version__
from revue.config import Settings, load_config
from revue.errors import ConfigError, RevueError
from revue.log import setup_logging
from revue.output import JsonFormatter, TerminalFormatter
from revue.platforms import PlatformAdapter, create_adapter
from revue.poster import post_review, set_status
from revue.providers import CompletionService
from revue.review import run_review

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_COMMENTS = 2

FOCUS_FIELDS = {
  "errors": "focus_errors",
  "error": "focus_errors",
  "warn": "focus_warn",
  "warnings": "focus_warn",
  "tips": "focus_tips",
  "tip": "focus_tips",
  "notes": "focus_notes",
  "note": "focus_notes",
  "grammar": "focus_grammar",
}

app = typer.Typer(
  name="revue",
  help="Pull request review combining pattern checks with an AI critique",
  no_args_is_help=False,
  add_completion=False,
)

console = Console(stderr=True)
logger = logging.getLogger("revue.cli")


def _is_debug() -> bool:
  return os.environ.get("REVUE_DEBUG", "").lower() in ("1", "true", "yes")


def version_callback(value: bool) -> None:
  if value:
    console.print(f"revue {__version__}")
    raise typer.Exit()


@app.command()
def main(
  platform: str = typer.Option(
    None, "--platform", "-p", help="Platform: github, bitbucket, azure, local"
  ),
  repository: str = typer.Option(
    None, "--repository", "-r", help="Repository (owner/name, workspace/repo or org/project/repo)"
  ),
  pull_request_id: str = typer.Option(None, "--pull-request-id", "-i", help="Pull request ID"),
  token: str = typer.Option(None, "--token", "-t", help="Platform auth token / PAT"),
  api_base: str = typer.Option(None, "--api-base", help="Base URL override for the platform API"),
  base_ref: str = typer.Option(None, "--base-ref", help="Base branch for the local platform"),
  dry_run: bool = typer.Option(False, "--dry-run", help="Console output only, no posting"),
  output_json: bool = typer.Option(False, "--output-json", help="Print a JSON envelope"),
  fail_on_comments: bool = typer.Option(
    False, "--fail-on-comments", help="Exit with code 2 if any comment is found"
  ),
  fail_on_warnings: bool = typer.Option(
    False, "--fail-on-warnings", help="Request changes on warnings as well as errors"
  ),
  provider: str = typer.Option(None, "--provider", help="AI provider: openai, anthropic, ollama"),
  model: str = typer.Option(None, "--model", "-m", help="AI model"),
  api_key: str = typer.Option(None, "--ai-api-key", help="AI provider API key"),
  temperature: float = typer.Option(None, "--temperature", help="Sampling temperature"),
  max_tokens: int = typer.Option(None, "--max-tokens", help="Maximum AI output tokens"),
  no_ai: bool = typer.Option(False, "--no-ai", help="Disable AI review"),
  max_comments: int = typer.Option(None, "--max-comments", help="Maximum number of comments"),
  focus: str = typer.Option(
    None, "--focus", help="AI focus: errors,warn,tips,notes,grammar (or none)"
  ),
  ai_failure: str = typer.Option(
    None, "--ai-failure", help="On AI failure: abort (default) or degrade"
  ),
  config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
  debug: bool = typer.Option(False, "--debug", "-d", help="Debug logging and full tracebacks"),
  version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
  """Review a pull request and post, print or emit the result.

  Exit codes: 0 on success, 1 on configuration or execution failure, 2 when
  --fail-on-comments is set and comments were found.
  """
  show_traceback = debug or _is_debug()

  overrides: dict[str, Any] = {
    "platform": platform,
    "repository": repository,
    "pull_request_id": pull_request_id,
    "token": token,
    "api_base": api_base,
    "base_ref": base_ref,
    "ai_provider": provider,
    "ai_model": model,
    "ai_api_key": api_key,
    "ai_temperature": temperature,
    "ai_max_tokens": max_tokens,
    "ai_failure_policy": ai_failure,
    "max_comments": max_comments,
  }
  for name, flag in (
    ("dry_run", dry_run),
    ("output_json", output_json),
    ("fail_on_comments", fail_on_comments),
    ("fail_on_warnings", fail_on_warnings),
  ):
    if flag:
      overrides[name] = True
  if no_ai:
    overrides["ai_enabled"] = False
  if debug:
    overrides["log_level"] = "DEBUG"
  if focus:
    overrides.update(_parse_focus(focus))

  try:
    settings = load_config(config, overrides)
  except ConfigError as e:
    console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
    raise typer.Exit(EXIT_FAILURE) from None

  setup_logging(settings.log_level, console)

  try:
    code = execute(settings)
  except RevueError as e:
    console.print(f"[red]Review execution failed:[/red] {escape(str(e))}")
    if show_traceback:
      console.print(traceback.format_exc(), markup=False)
    raise typer.Exit(EXIT_FAILURE) from None
  except Exception as e:
    console.print(f"[red]Review execution failed:[/red] {escape(str(e))}")
    if show_traceback:
      console.print("\n[dim]Traceback:[/dim]")
      console.print(traceback.format_exc(), markup=False)
    raise typer.Exit(EXIT_FAILURE) from None

  raise typer.Exit(code)


def execute(
  settings: Settings,
  adapter: PlatformAdapter | None = None,
  service: CompletionService | None = None,
) -> int:
  """Run one review and route the result. Returns the process exit code."""
  adapter = adapter or create_adapter(settings)
  try:
    result = run_review(adapter, settings, service)

    if settings.output_json:
      typer.echo(JsonFormatter().format(result, settings))
    elif settings.dry_run:
      TerminalFormatter(console).format(result, settings)
    else:
      logger.info("Posting review comments...")
      post_review(adapter, result, settings)
      set_status(adapter, result, settings)
      logger.info("Review successfully posted.")
  finally:
    adapter.close()

  if settings.fail_on_comments and result.comments:
    logger.warning("Comments found, exiting with code 2 (--fail-on-comments enabled)")
    return EXIT_COMMENTS
  return EXIT_OK


def _parse_focus(focus_str: str) -> dict[str, bool]:
  """Parse a focus list into the five focus switches."""
  selected: set[str] = set()
  for part in focus_str.split(","):
    part = part.strip().lower()
    if not part or part == "none":
      continue
    field = FOCUS_FIELDS.get(part)
    if field is None:
      console.print(f"[yellow]Warning:[/yellow] Unknown focus area '{part}', ignoring")
      continue
    selected.add(field)

  if not selected and "none" not in focus_str.lower():
    return {}
  return {field: field in selected for field in set(FOCUS_FIELDS.values())}


if __name__ == "__main__":
  app()
