"""WebSocket handler for real-time play."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from snake_tab.engine import GameState
from snake_tab.render import snapshot
from snake_tab.server.models import ClientMessage
from snake_tab.server.sessions import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()

# Pending snapshots per socket; the oldest board is dropped first.
_OUTBOX_SIZE = 8


def _get_sessions(ws: WebSocket) -> SessionManager:
    return ws.app.state.sessions


def _enqueue(outbox: asyncio.Queue, payload: dict) -> None:
    """Queue a snapshot, dropping the oldest one when the outbox is full."""
    if outbox.full():
        outbox.get_nowait()
    outbox.put_nowait(payload)


async def _pump(websocket: WebSocket, outbox: asyncio.Queue) -> None:
    """Forward queued board snapshots to the socket in order."""
    while True:
        payload = await outbox.get()
        await websocket.send_text(json.dumps(payload, separators=(",", ":")))


@ws_router.websocket("/play")
async def play(websocket: WebSocket) -> None:
    """Player WebSocket: send keys and button actions, receive the board."""
    sessions = _get_sessions(websocket)
    grid_size = sessions.config.grid_size
    outbox: asyncio.Queue = asyncio.Queue(maxsize=_OUTBOX_SIZE)

    def _on_change(state: GameState) -> None:
        _enqueue(outbox, snapshot(state, sessions.store.read(), grid_size))

    await websocket.accept()
    driver = sessions.open_session(on_change=_on_change)
    _on_change(driver.state)
    sender = asyncio.create_task(_pump(websocket, outbox))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = ClientMessage.model_validate_json(raw)
            except ValidationError:
                continue

            if msg.action == "start":
                driver.start()
            elif msg.action == "reset":
                driver.reset()
            elif msg.key is not None:
                driver.handle_key(msg.key)
    except WebSocketDisconnect:
        logger.info("Player disconnected.")
    finally:
        sessions.close_session(driver)
        sender.cancel()
        (result,) = await asyncio.gather(sender, return_exceptions=True)
        if isinstance(result, Exception):
            logger.warning("Snapshot sender failed: %r", result)
