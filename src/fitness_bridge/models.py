"""Data models for sensor samples, classified events and notifications."""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    """Committed or candidate activity labels."""
    STATIONARY = "stationary"
    WALKING = "walking"
    RUNNING = "running"


class ControlCommand(str, Enum):
    """Commands accepted by the accelerometer control surface."""
    START = "start"
    STOP = "stop"
    RESET = "reset"


class SessionPhase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class LocationProviderName(str, Enum):
    """Location providers, in fallback order for a one-shot fix."""
    GPS = "gps"
    NETWORK = "network"


class BiometricStatus(str, Enum):
    """What the host reports when asked whether strong biometrics can be used."""
    SUCCESS = "success"
    NO_HARDWARE = "no_hardware"
    HARDWARE_UNAVAILABLE = "hardware_unavailable"
    NONE_ENROLLED = "none_enrolled"
    SECURITY_UPDATE_REQUIRED = "security_update_required"
    UNSUPPORTED = "unsupported"


class AuthenticationOutcome(str, Enum):
    """Terminal outcome of a biometric prompt."""
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    LOCKOUT = "lockout"
    HARDWARE_ERROR = "hardware_error"
    ERROR = "error"


class NotificationKind(str, Enum):
    STEP_GOAL = "step_goal"
    FALL_DETECTED = "fall_detected"


class NotificationPriority(str, Enum):
    HIGH = "high"
    MAX = "max"


class ChannelModel(BaseModel):
    """Base for records that cross the channel boundary with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    def to_channel(self) -> dict:
        """Serialize using the wire key names."""
        return self.model_dump(mode="json", by_alias=True)


class MotionSample(ChannelModel):
    """A single 3-axis accelerometer reading."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    x: float
    y: float
    z: float
    timestamp_millis: int = Field(alias="timestamp", description="Epoch millis")


class SampleBatch(BaseModel):
    """Samples pushed by the host sensor subsystem, oldest first."""
    samples: List[MotionSample] = Field(min_length=1)


class LocationFix(ChannelModel):
    """A raw location fix, relayed unmodified."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    latitude: float
    longitude: float
    altitude: float = 0.0
    speed_mps: float = Field(default=0.0, alias="speed")
    accuracy_meters: float = Field(default=0.0, alias="accuracy")
    timestamp_millis: int = Field(alias="timestamp", description="Epoch millis")


class MotionUpdate(ChannelModel):
    """Throttled composite motion event."""
    type: Literal["motion_update"] = "motion_update"
    step_count: int = Field(alias="stepCount", ge=0)
    activity_type: ActivityType = Field(alias="activityType")
    avg_magnitude: float = Field(alias="magnitude", description="Smoothed magnitude (m/s²)")


class FallDetected(ChannelModel):
    """Immediate fall alert."""
    type: Literal["fall_detected"] = "fall_detected"
    magnitude: float = Field(description="Raw magnitude that triggered the alert (m/s²)")
    timestamp_millis: int = Field(alias="timestamp")


MotionEvent = Annotated[Union[MotionUpdate, FallDetected], Field(discriminator="type")]


class AuthenticationResult(BaseModel):
    """Detailed biometric result; the boolean surface only sees `succeeded`."""
    outcome: AuthenticationOutcome
    error_code: Optional[int] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == AuthenticationOutcome.SUCCEEDED


class Notification(BaseModel):
    """A user-visible local notification."""
    kind: NotificationKind
    notification_id: int
    channel_id: str
    title: str
    text: str
    priority: NotificationPriority
    auto_cancel: bool = True
    vibrate_pattern: List[int] = Field(default_factory=list)
    created_at: datetime
