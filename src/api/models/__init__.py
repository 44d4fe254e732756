"""API Pydantic models."""

from .events import CreateEventRequest, EventPayload
from .responses import (
    ApiResponse,
    ErrorCodes,
    HealthResponse,
    error_response,
    success_response,
    validation_message,
)

__all__ = [
    "ApiResponse",
    "CreateEventRequest",
    "ErrorCodes",
    "EventPayload",
    "HealthResponse",
    "error_response",
    "success_response",
    "validation_message",
]
