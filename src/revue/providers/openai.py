"""OpenAI provider."""

from typing import Any

from revue.providers.base import CompletionRequest, CompletionService
from revue.providers.parser import extract_json
from revue.providers.registry import register_provider


class OpenAIService(CompletionService):
  """OpenAI chat completions with a JSON schema response format."""

  DEFAULT_MODEL = "gpt-5-mini"

  def __init__(self, model: str | None = None, api_key: str | None = None, client: Any = None):
    self._model = model or self.DEFAULT_MODEL
    self._api_key = api_key
    self._client = client

  @property
  def name(self) -> str:
    return "openai"

  @property
  def model(self) -> str:
    return self._model

  def is_available(self) -> bool:
    return bool(self._api_key) or self._client is not None

  def _get_client(self) -> Any:
    if self._client is None:
      from openai import OpenAI
      self._client = OpenAI(api_key=self._api_key, max_retries=0)
    return self._client

  def complete(self, request: CompletionRequest) -> Any:
    client = self._get_client()

    response = client.chat.completions.create(
      model=self._model,
      temperature=request.temperature,
      max_completion_tokens=request.max_tokens,
      messages=[
        {"role": "system", "content": request.system},
        {"role": "user", "content": request.user},
      ],
      response_format={
        "type": "json_schema",
        "json_schema": {
          "name": request.schema_name,
          "schema": request.schema,
          "strict": True,
        },
      },
    )

    message = response.choices[0].message
    if getattr(message, "refusal", None):
      raise RuntimeError(f"OpenAI refused the request: {message.refusal}")
    return extract_json(message.content or "{}")


def _create_openai(model: str | None, api_key: str | None) -> CompletionService:
  return OpenAIService(model, api_key)


register_provider("openai", _create_openai)
