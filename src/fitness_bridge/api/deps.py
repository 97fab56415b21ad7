"""API dependencies."""

from fastapi import Request, WebSocket

from ..bridge import SensorBridge


def get_bridge(request: Request) -> SensorBridge:
    """Get the bridge attached to the running app."""
    return request.app.state.bridge


def get_ws_bridge(websocket: WebSocket) -> SensorBridge:
    return websocket.app.state.bridge
