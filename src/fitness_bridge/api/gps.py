"""GPS method and stream endpoints."""

import structlog
from fastapi import APIRouter, Depends, WebSocket

from ..bridge import SensorBridge
from ..streaming import QueueEventSink
from .deps import get_bridge, get_ws_bridge
from .pump import pump_events

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/gps", tags=["gps"])


@router.get("/enabled")
async def is_gps_enabled(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    return {"enabled": bridge.location.is_gps_enabled()}


@router.post("/permissions")
async def request_permissions(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    return {"granted": bridge.location.request_permissions()}


@router.get("/location")
async def get_current_location(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    """Last known fix.

    Errors map to PERMISSION_DENIED, NO_LOCATION or SECURITY_ERROR responses.
    """
    fix = bridge.location.get_current_location()
    logger.debug("Current location served", latitude=fix.latitude, longitude=fix.longitude)
    return fix.to_channel()


@router.websocket("/stream")
async def location_stream(websocket: WebSocket) -> None:
    """Relay every GPS fix until the client disconnects."""
    bridge = get_ws_bridge(websocket)
    sink = QueueEventSink()

    subscription = await bridge.location_stream.listen(sink)

    await websocket.accept()
    logger.info("Location stream connected", attached=subscription is not None)
    await pump_events(websocket, sink, subscription, "location")
