"""API routers."""

from .attendance import router as attendance_router
from .courses import router as courses_router
from .health import router as health_router
from .sessions import router as sessions_router

__all__ = [
    "attendance_router",
    "courses_router",
    "health_router",
    "sessions_router",
]
