"""Structured output schema for AI review responses."""

from typing import Any

from pydantic import BaseModel, Field

from revue.models import CommentType

SCHEMA_NAME = "review_response"


class AIComment(BaseModel):
  """One comment as returned by the AI service."""

  file: str | None = None
  line: int | None = None
  type: CommentType
  message: str = Field(min_length=1)


def review_json_schema() -> dict[str, Any]:
  """JSON schema sent to the completion service."""
  return {
    "type": "object",
    "properties": {
      "comments": {
        "type": "array",
        "items": {
          "type": "object",
          "properties": {
            "file": {"type": ["string", "null"]},
            "line": {"type": ["integer", "null"]},
            "type": {"type": "string", "enum": [t.value for t in CommentType]},
            "message": {"type": "string"},
          },
          "required": ["file", "line", "type", "message"],
          "additionalProperties": False,
        },
      },
    },
    "required": ["comments"],
    "additionalProperties": False,
  }
