"""
Tool definition DTO.

Describes a function the model may call: name, description and a JSON schema
for its parameters. Adapters translate it into each provider's tool format.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


def _empty_object_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


class ToolInfo(BaseModel):
    """Provider-agnostic tool definition.

    Parameters
    ----------
    name:
        Function name exposed to the model. Must be non-empty.
    description:
        Natural-language description used by the model to pick the tool.
    parameters:
        JSON schema (object) describing the arguments.

    Notes
    -----
    - Validation errors are raised by Pydantic for an empty name or a
      non-object parameters schema.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=_empty_object_schema)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool name must be non-empty")
        return value

    @field_validator("parameters")
    @classmethod
    def _parameters_is_object(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if value.get("type", "object") != "object":
            raise ValueError("tool parameters schema must describe an object")
        return value


__all__ = ["ToolInfo"]
