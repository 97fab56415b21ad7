"""HTTP and WebSocket routers for the bridge channels."""
