"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.logging import configure_logging
from api.models.responses import ErrorCodes, error_response, validation_message
from api.routes import events_router, health_router, pages_router
from core.config import API_DEBUG, API_VERSION, CORS_ALLOW_ORIGINS, EVENTS_BACKEND

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting events API (backend=%s)", EVENTS_BACKEND)
    yield


app = FastAPI(
    title="Banquet Calendar API",
    description="Date-keyed booking and reservation events for the calendar UI",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)


class PreflightCORSMiddleware(CORSMiddleware):
    """Answers every preflight with an empty 200; CORS headers only for allowed origins."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Dict details (auth failures) become the body; others are wrapped."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"success": False, "error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are caller errors, reported as 400."""
    return error_response(400, validation_message(exc.errors()), ErrorCodes.INVALID_REQUEST)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error", ErrorCodes.INTERNAL_ERROR)


# Include routers
app.include_router(health_router)
app.include_router(events_router)
app.include_router(pages_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
