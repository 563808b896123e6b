"""Anthropic Claude provider."""

from typing import Any

from revue.providers.base import CompletionRequest, CompletionService
from revue.providers.registry import register_provider


class AnthropicService(CompletionService):
  """Anthropic messages API, constrained through a single forced tool call."""

  DEFAULT_MODEL = "claude-sonnet-4-5"

  def __init__(self, model: str | None = None, api_key: str | None = None, client: Any = None):
    self._model = model or self.DEFAULT_MODEL
    self._api_key = api_key
    self._client = client

  @property
  def name(self) -> str:
    return "anthropic"

  @property
  def model(self) -> str:
    return self._model

  def is_available(self) -> bool:
    return bool(self._api_key) or self._client is not None

  def _get_client(self) -> Any:
    if self._client is None:
      try:
        from anthropic import Anthropic
        self._client = Anthropic(api_key=self._api_key, max_retries=0)
      except ImportError as e:
        raise ImportError(
          "anthropic not installed. Install with: pip install 'revue[anthropic]'"
        ) from e
    return self._client

  def complete(self, request: CompletionRequest) -> Any:
    client = self._get_client()

    response = client.messages.create(
      model=self._model,
      max_tokens=request.max_tokens,
      temperature=request.temperature,
      system=request.system,
      messages=[{"role": "user", "content": request.user}],
      tools=[{
        "name": request.schema_name,
        "description": "Report the review comments.",
        "input_schema": request.schema,
      }],
      tool_choice={"type": "tool", "name": request.schema_name},
    )

    for block in response.content:
      if getattr(block, "type", None) == "tool_use":
        return block.input
    return None


def _create_anthropic(model: str | None, api_key: str | None) -> CompletionService:
  return AnthropicService(model, api_key)


register_provider("anthropic", _create_anthropic)
