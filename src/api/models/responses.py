"""Pydantic response models for API endpoints."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    storage_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ApiResponse(BaseModel):
    """Uniform envelope for every /api/events response."""

    success: bool
    data: Any = None
    error: str | None = None
    code: str | None = None


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def success_response(data: Any = None) -> JSONResponse:
    """200 envelope; `data` is omitted when None (bare acknowledgment)."""
    content: dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=200, content=content)


def error_response(status_code: int, error: str, code: str | None = None) -> JSONResponse:
    """Failure envelope with a string message and optional machine code."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, error=error, code=code).model_dump(
            exclude_none=True
        ),
    )


def validation_message(errors: list[dict]) -> str:
    """Flatten pydantic error dicts into one caller-facing line."""
    parts = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(location)}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"
