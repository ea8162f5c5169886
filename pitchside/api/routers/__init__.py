"""API routers."""

from pitchside.api.routers.sessions import router as sessions_router
from pitchside.api.routers.websocket import router as websocket_router

__all__ = [
    "sessions_router",
    "websocket_router",
]
