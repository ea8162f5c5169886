"""FastAPI application for pitchside drill sessions."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pitchside.api.routers import sessions_router, websocket_router
from pitchside.session import get_session_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("Pitchside API starting up")
    yield
    logger.info("Pitchside API shutting down")
    await get_session_manager().cleanup_all()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Pitchside API",
        description="Football drill simulation and analytics API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(websocket_router)

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict:
    """Root endpoint - API info."""
    return {
        "name": "Pitchside API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    sessions = await get_session_manager().list_sessions()
    return {
        "status": "healthy",
        "active_sessions": len(sessions),
    }


def run_api(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server."""
    uvicorn.run(
        "pitchside.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )
