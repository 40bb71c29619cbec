"""Pydantic models for HTTP responses and WebSocket messages."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ClientMessage(BaseModel):
    """A message sent by the page over ``/play``.

    ``key`` carries a ``KeyboardEvent.key`` value; ``action`` carries a
    button press.
    """

    key: str | None = Field(default=None, min_length=1, max_length=32)
    action: Literal["start", "reset"] | None = None


class HighScoreResponse(BaseModel):
    """Response for GET /high-score."""

    high_score: int = Field(ge=0)
