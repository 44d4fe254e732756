"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_event_store
from api.models.responses import HealthResponse
from core.config import API_VERSION
from services.events import EventStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(store: EventStore = Depends(get_event_store)):
    """
    Health check endpoint for monitoring.

    Returns 200 if the events backend is reachable, 503 otherwise.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        await store.ping()
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                storage_available=False,
                timestamp=timestamp,
                error="Events storage unreachable",
            ).model_dump(),
        )

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        storage_available=True,
        timestamp=timestamp,
    )
