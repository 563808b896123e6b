"""Configuration loading from file, environment and CLI overrides."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from revue.config.settings import Settings
from revue.errors import ConfigError

CONFIG_FILENAMES = [".revue.yaml", ".revue.yml", "revue.yaml", "revue.yml"]

# First variable found wins.
ENV_VARS: dict[str, tuple[str, ...]] = {
  "platform": ("REVUE_PLATFORM",),
  "repository": ("REVUE_REPOSITORY", "GITHUB_REPOSITORY"),
  "pull_request_id": ("REVUE_PULL_REQUEST_ID", "GITHUB_PR_ID"),
  "token": ("REVUE_TOKEN", "GITHUB_TOKEN"),
  "api_base": ("REVUE_API_BASE",),
  "base_ref": ("REVUE_BASE_REF",),
  "dry_run": ("REVUE_DRY_RUN",),
  "output_json": ("REVUE_OUTPUT_JSON",),
  "fail_on_comments": ("REVUE_FAIL_ON_COMMENTS",),
  "fail_on_warnings": ("REVUE_FAIL_ON_WARNINGS",),
  "ai_enabled": ("REVUE_AI_ENABLED",),
  "ai_provider": ("REVUE_AI_PROVIDER",),
  "ai_api_key": ("REVUE_AI_API_KEY",),
  "ai_model": ("REVUE_AI_MODEL",),
  "ai_temperature": ("REVUE_AI_TEMPERATURE",),
  "ai_max_tokens": ("REVUE_AI_MAX_TOKENS",),
  "ai_failure_policy": ("REVUE_AI_FAILURE_POLICY",),
  "max_comments": ("REVUE_MAX_COMMENTS",),
  "focus_errors": ("REVUE_FOCUS_ERRORS",),
  "focus_warn": ("REVUE_FOCUS_WARN",),
  "focus_tips": ("REVUE_FOCUS_TIPS",),
  "focus_notes": ("REVUE_FOCUS_NOTES",),
  "focus_grammar": ("REVUE_FOCUS_GRAMMAR",),
  "flag_any_type": ("REVUE_FLAG_ANY_TYPE",),
  "log_level": ("LOG_LEVEL",),
}

PROVIDER_KEY_VARS = {
  "openai": "OPENAI_API_KEY",
  "anthropic": "ANTHROPIC_API_KEY",
}


def _find_config_file(config_path: Path | None = None) -> Path | None:
  """Find config file path, or None if no config exists."""
  if config_path:
    if not config_path.exists():
      raise ConfigError(f"Config file not found: {config_path}")
    return config_path

  for filename in CONFIG_FILENAMES:
    path = Path.cwd() / filename
    if path.exists():
      return path

  return None


def _load_file(path: Path) -> dict[str, Any]:
  """Load raw settings from a YAML file."""
  try:
    with open(path) as f:
      data = yaml.safe_load(f) or {}
  except yaml.YAMLError as e:
    raise ConfigError(f"Invalid YAML in {path}: {e}") from e

  if not isinstance(data, dict):
    raise ConfigError(f"Config file {path} must contain a mapping")
  return data


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
  """Collect settings from environment variables."""
  data: dict[str, Any] = {}
  for field, names in ENV_VARS.items():
    for name in names:
      value = env.get(name)
      if value not in (None, ""):
        data[field] = value
        break
  return data


def _resolve_api_key(data: dict[str, Any], env: Mapping[str, str]) -> None:
  """Fill ai_api_key from the provider's conventional variable."""
  if data.get("ai_api_key"):
    return
  provider = data.get("ai_provider", "openai")
  var = PROVIDER_KEY_VARS.get(provider)
  if var and env.get(var):
    data["ai_api_key"] = env[var]


def load_config(
  config_path: Path | None = None,
  overrides: Mapping[str, Any] | None = None,
  env: Mapping[str, str] | None = None,
) -> Settings:
  """Load settings: defaults < file < environment < overrides."""
  env = os.environ if env is None else env

  data: dict[str, Any] = {}
  path = _find_config_file(config_path)
  if path:
    data.update(_load_file(path))

  data.update(_from_env(env))

  if overrides:
    data.update({k: v for k, v in overrides.items() if v is not None})

  _resolve_api_key(data, env)
  return parse_config(data)


def parse_config(data: dict[str, Any]) -> Settings:
  """Validate a raw settings dict."""
  try:
    return Settings(**data)
  except ValidationError as e:
    problems = "; ".join(
      f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
      for err in e.errors()
    )
    raise ConfigError(problems) from e
