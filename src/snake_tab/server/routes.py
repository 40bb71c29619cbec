"""HTTP route handlers: the page and the best score."""

from __future__ import annotations

from importlib import resources

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from snake_tab.server.models import HighScoreResponse
from snake_tab.server.sessions import SessionManager

router = APIRouter()


def _get_sessions(request: Request) -> SessionManager:
    return request.app.state.sessions


@router.get("/", response_class=HTMLResponse)
async def index() -> str:
    """Serve the game page."""
    return (
        resources.files("snake_tab.server")
        .joinpath("static/index.html")
        .read_text(encoding="utf-8")
    )


@router.get("/high-score")
async def high_score(request: Request) -> HighScoreResponse:
    return HighScoreResponse(high_score=_get_sessions(request).store.read())

