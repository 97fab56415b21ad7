"""Accelerometer event stream and control endpoints."""

import structlog
from fastapi import APIRouter, Depends, WebSocket, status

from ..bridge import SensorBridge
from ..errors import BridgeError
from ..streaming import QueueEventSink
from .deps import get_bridge, get_ws_bridge
from .pump import pump_events

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/accelerometer", tags=["accelerometer"])


@router.websocket("/stream")
async def accelerometer_stream(websocket: WebSocket) -> None:
    """Stream motion updates and fall alerts for one listening session."""
    bridge = get_ws_bridge(websocket)
    sink = QueueEventSink()

    try:
        subscription = await bridge.accelerometer.listen(sink)
    except BridgeError as e:
        logger.error("Accelerometer stream unavailable", code=e.code, error=e.message)
        await websocket.accept()
        await websocket.send_json(e.to_channel())
        await websocket.close(code=1011)
        return

    await websocket.accept()
    logger.info("Accelerometer stream connected")
    await pump_events(websocket, sink, subscription, "accelerometer")


@router.post("/control/{command}", status_code=status.HTTP_200_OK)
async def accelerometer_control(
    command: str,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    """Apply start, stop or reset to the current session."""
    bridge.accelerometer.handle_command(command)
    return {"status": "success", "phase": bridge.accelerometer.phase.value}
