"""Application settings."""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from revue.models import AIFailurePolicy

REMOTE_PLATFORMS = ("github", "bitbucket", "azure")
PLATFORMS = (*REMOTE_PLATFORMS, "local")
KEYLESS_PROVIDERS = ("ollama",)


class Settings(BaseModel):
  """Application configuration."""

  model_config = ConfigDict(use_enum_values=False, extra="forbid", coerce_numbers_to_str=True)

  # Platform
  platform: str = "github"
  repository: str = ""
  pull_request_id: str = ""
  token: str = Field(default="", repr=False)
  api_base: str | None = None
  base_ref: str = "main"

  # Output behaviour
  dry_run: bool = False
  output_json: bool = False
  fail_on_comments: bool = False
  fail_on_warnings: bool = False

  # AI
  ai_enabled: bool = True
  ai_provider: str = "openai"
  ai_api_key: str | None = Field(default=None, repr=False)
  ai_model: str | None = None
  ai_temperature: float = 1.0
  ai_max_tokens: int = Field(default=1500, gt=0)
  ai_failure_policy: AIFailurePolicy = AIFailurePolicy.ABORT
  max_comments: int = Field(default=50, ge=0)

  # Focus switches
  focus_errors: bool = True
  focus_warn: bool = True
  focus_tips: bool = True
  focus_notes: bool = False
  focus_grammar: bool = False

  # Heuristics
  flag_any_type: bool = True

  log_level: str = "INFO"

  @field_validator("platform")
  @classmethod
  def _check_platform(cls, value: str) -> str:
    if value not in PLATFORMS:
      expected = ", ".join(PLATFORMS)
      raise ValueError(f"unsupported platform '{value}', expected one of: {expected}")
    return value

  @field_validator("log_level")
  @classmethod
  def _check_log_level(cls, value: str) -> str:
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
      raise ValueError(f"unknown log level '{value}'")
    return level

  @model_validator(mode="after")
  def _check_required(self) -> "Settings":
    missing = []
    if self.platform in REMOTE_PLATFORMS:
      if not self.repository:
        missing.append("repository")
      if not self.pull_request_id:
        missing.append("pull_request_id")
      if not self.token:
        missing.append("token")
    if self.ai_enabled and self.ai_provider not in KEYLESS_PROVIDERS and not self.ai_api_key:
      missing.append("ai_api_key")
    if missing:
      raise ValueError(f"missing required settings: {', '.join(missing)}")
    return self
