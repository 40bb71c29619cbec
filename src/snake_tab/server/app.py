"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_tab.config import GameConfig
from snake_tab.server.routes import router
from snake_tab.server.sessions import SessionManager
from snake_tab.server.websocket import ws_router


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        yield
        await app.state.sessions.cleanup()

    app = FastAPI(title="Snake Tab", version="0.1.0", lifespan=_lifespan)
    app.state.sessions = SessionManager(config)
    app.include_router(router)
    app.include_router(ws_router)
    return app
