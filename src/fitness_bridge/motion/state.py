"""Per-session motion state."""

from dataclasses import dataclass, field
from typing import Optional

from ..models import ActivityType
from .smoother import MagnitudeSmoother


@dataclass
class MotionState:
    """Mutable state owned by one accelerometer listening session.

    Created when the subscription starts and dropped when it is cancelled.
    """

    history_size: int = 10
    step_count: int = 0
    last_magnitude: float = 0.0
    goal_notification_sent: bool = False
    last_activity_type: ActivityType = ActivityType.STATIONARY
    last_candidate: ActivityType = ActivityType.STATIONARY
    activity_confidence: int = 0
    last_fall_detection_time: Optional[int] = None
    sample_count: int = 0
    magnitude_history: MagnitudeSmoother = field(init=False)

    def __post_init__(self):
        self.magnitude_history = MagnitudeSmoother(self.history_size)

    def reset_counters(self) -> None:
        """Zero the step counter and re-arm the goal notification."""
        self.step_count = 0
        self.goal_notification_sent = False

    def reset_all(self) -> None:
        """Counter reset plus history, activity hysteresis and fall cooldown."""
        self.reset_counters()
        self.last_magnitude = 0.0
        self.last_activity_type = ActivityType.STATIONARY
        self.last_candidate = ActivityType.STATIONARY
        self.activity_confidence = 0
        self.last_fall_detection_time = None
        self.sample_count = 0
        self.magnitude_history.clear()
