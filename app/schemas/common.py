"""Shared Pydantic schema base with camelCase aliases, plus error/health bodies."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class ErrorDetail(BaseModel):
    code: str
    message: str
    parameter: str | None = None  # set on 400s: the offending query parameter


class ErrorResponse(BaseModel):
    """Body of every error produced by app.core.exceptions handlers."""
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
