"""Forwarding a subscription's events over a WebSocket."""

import asyncio
from typing import Optional

import structlog
from fastapi import WebSocket, WebSocketDisconnect

from ..errors import BridgeError
from ..streaming import QueueEventSink, StreamSubscription

logger = structlog.get_logger(__name__)


async def pump_events(
    websocket: WebSocket,
    sink: QueueEventSink,
    subscription: Optional[StreamSubscription],
    stream: str,
) -> None:
    """Send sink items to the client until it disconnects or an error ends the stream.

    The subscription is cancelled on the way out, whichever side finished.
    """

    async def forward() -> None:
        while True:
            item = await sink.get()
            await websocket.send_json(item.to_channel())
            if isinstance(item, BridgeError):
                logger.info("Stream ended with error", stream=stream, code=item.code)
                await websocket.close(code=1008)
                return

    async def watch() -> None:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    forward_task = asyncio.create_task(forward())
    watch_task = asyncio.create_task(watch())
    try:
        done, pending = await asyncio.wait(
            {forward_task, watch_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                logger.error("WebSocket stream error", stream=stream, error=str(error))
    finally:
        forward_task.cancel()
        watch_task.cancel()
        if subscription is not None:
            subscription.cancel()
        logger.info("WebSocket stream closed", stream=stream)
