"""API route modules."""

from .events import router as events_router
from .health import router as health_router
from .pages import router as pages_router

__all__ = ["events_router", "health_router", "pages_router"]
