"""Errors surfaced across the channel boundary."""

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base class for errors that carry a channel error code."""

    code = "BRIDGE_ERROR"
    status_code = 500
    default_message = "Bridge error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_channel(self) -> Dict[str, Any]:
        return {"type": "error", "code": self.code, "message": self.message}


class PermissionDenied(BridgeError):
    """Location permission has not been granted."""
    code = "PERMISSION_DENIED"
    status_code = 403
    default_message = "Location permission not granted"


class LocationUnavailable(BridgeError):
    """No provider has a last known fix."""
    code = "NO_LOCATION"
    status_code = 404
    default_message = "No location available"


class SecurityError(BridgeError):
    """The OS refused access at call time despite an earlier permission check."""
    code = "SECURITY_ERROR"
    status_code = 403
    default_message = "Location access rejected by the OS"


class UnsupportedOperation(BridgeError):
    code = "NOT_IMPLEMENTED"
    status_code = 501
    default_message = "Unsupported operation"


class SensorUnavailable(BridgeError):
    """The device has no sensor of the requested type."""
    code = "SENSOR_UNAVAILABLE"
    status_code = 503
    default_message = "Sensor not available on this device"


class AuthenticationInProgress(BridgeError):
    code = "AUTHENTICATION_IN_PROGRESS"
    status_code = 409
    default_message = "A biometric prompt is already showing"


class StreamReplaced(BridgeError):
    """A newer listener took over the accelerometer session."""
    code = "STREAM_REPLACED"
    status_code = 409
    default_message = "Stream replaced by a newer listener"
