from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ShapeSchema(BaseModel):
    type: str
    prefix: str = ""
    position: str = ""
    model: Any = None
    zones: dict[str, list[ShapeSchema]] = Field(default_factory=dict)


class EditorResponse(BaseModel):
    shape: ShapeSchema
    errors: dict[str, list[str]] = Field(default_factory=dict)


class DisplayListResponse(BaseModel):
    items: list[ShapeSchema]


class UpdateRequest(BaseModel):
    """Submitted form values keyed by ``"{prefix}.{field}"``."""

    fields: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str = "ok"
