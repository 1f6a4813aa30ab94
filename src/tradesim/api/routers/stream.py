"""Websocket stream of live prices for passive viewers."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from tradesim.app_context import AppContext

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stream"])


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    """Drain client messages until the client goes away."""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Price stream client disconnected")


@router.websocket("/ws/prices")
async def price_stream(websocket: WebSocket) -> None:
    """Send the current snapshot, then every price update as it arrives."""
    context: AppContext = websocket.app.state.context
    broadcaster = context.broadcaster

    await websocket.accept()
    queue = broadcaster.subscribe()
    disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        for symbol, price in context.price_cache.snapshot().items():
            await websocket.send_json({"symbol": symbol, "price": float(price)})

        while True:
            getter = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {getter, disconnected},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if disconnected in done:
                getter.cancel()
                break
            await websocket.send_json(getter.result())
    except WebSocketDisconnect:
        logger.debug("Price stream client disconnected during send")
    finally:
        disconnected.cancel()
        broadcaster.unsubscribe(queue)
