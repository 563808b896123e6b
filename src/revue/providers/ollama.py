"""Ollama local LLM provider."""

import os
from typing import Any

import httpx

from revue.providers.base import CompletionRequest, CompletionService
from revue.providers.parser import extract_json
from revue.providers.registry import register_provider


class OllamaService(CompletionService):
  """Ollama chat API with the review schema as the output format."""

  DEFAULT_MODEL = "qwen2.5-coder"
  DEFAULT_HOST = "http://localhost:11434"
  REQUEST_TIMEOUT = 300.0

  def __init__(self, model: str | None = None, client: httpx.Client | None = None):
    self._model = model or self.DEFAULT_MODEL
    self._host = os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)
    self._client = client or httpx.Client(base_url=self._host)

  @property
  def name(self) -> str:
    return "ollama"

  @property
  def model(self) -> str:
    return self._model

  def is_available(self) -> bool:
    # Needs no key; an unreachable server surfaces from complete().
    return bool(self._host)

  def complete(self, request: CompletionRequest) -> Any:
    response = self._client.post(
      "/api/chat",
      json={
        "model": self._model,
        "messages": [
          {"role": "system", "content": request.system},
          {"role": "user", "content": request.user},
        ],
        "stream": False,
        "format": request.schema,
        "options": {
          "temperature": request.temperature,
          "num_predict": request.max_tokens,
        },
      },
      timeout=self.REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    content = response.json().get("message", {}).get("content", "")
    return extract_json(content or "{}")


def _create_ollama(model: str | None, api_key: str | None) -> CompletionService:
  return OllamaService(model)


register_provider("ollama", _create_ollama)
