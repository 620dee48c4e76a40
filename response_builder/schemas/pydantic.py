"""Pydantic v2 models for the error response shapes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse

# Response values are built once and never mutated
_FROZEN_CONFIG = ConfigDict(frozen=True)


# ── Debug ──────────────────────────────────────────────────────────────
class TraceInfo(BaseModel):
    """Where the handled exception came from. Only sent with debug tracing on."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
    class_name: str = Field(alias="class")
    file: str | None = None
    line: int | None = None


# ── Error response ─────────────────────────────────────────────────────
class ApiErrorResponse(BaseModel):
    model_config = _FROZEN_CONFIG
    api_code: int
    http_code: int = Field(ge=400, le=599)
    message: str = Field(min_length=1)
    locale: str = "en"
    data: dict[str, Any] | None = None
    debug: dict[str, Any] | None = None
    debug_key: str = "debug"
    headers: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON envelope sent to the client."""
        body: dict[str, Any] = {
            "success": False,
            "code": self.api_code,
            "locale": self.locale,
            "message": self.message,
            "data": self.data,
        }
        if self.debug is not None:
            body[self.debug_key] = self.debug
        return body

    def to_json_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.http_code,
            content=self.to_dict(),
            headers=self.headers,
        )
