"""Local notifications for the step goal and fall alerts."""

from collections import deque
from datetime import datetime, timezone
from typing import Callable, List, Optional

import structlog

from .models import Notification, NotificationKind, NotificationPriority

logger = structlog.get_logger(__name__)

CHANNEL_ID = "fitness_notifications"
STEP_GOAL_NOTIFICATION_ID = 1
FALL_NOTIFICATION_ID = 2
FALL_VIBRATE_PATTERN = [0, 500, 200, 500]

NotificationSink = Callable[[Notification], None]


class Notifier:
    """Builds notifications and hands them to the host renderer.

    Posting is fire-and-forget: a failing sink is logged and does not affect
    sample processing. The most recent notifications are kept for inspection.
    """

    def __init__(self, history_size: int = 50, sinks: Optional[List[NotificationSink]] = None):
        self.sinks: List[NotificationSink] = list(sinks or [])
        self._recent = deque(maxlen=history_size)

    def step_goal_reached(self, steps: int) -> Notification:
        notification = Notification(
            kind=NotificationKind.STEP_GOAL,
            notification_id=STEP_GOAL_NOTIFICATION_ID,
            channel_id=CHANNEL_ID,
            title="Goal reached!",
            text=f"You have completed {steps} steps. Keep it up!",
            priority=NotificationPriority.HIGH,
            created_at=datetime.now(timezone.utc),
        )
        self._post(notification)
        return notification

    def fall_detected(self, magnitude: float) -> Notification:
        notification = Notification(
            kind=NotificationKind.FALL_DETECTED,
            notification_id=FALL_NOTIFICATION_ID,
            channel_id=CHANNEL_ID,
            title="Fall detected",
            text="A possible fall was detected. Are you okay?",
            priority=NotificationPriority.MAX,
            vibrate_pattern=list(FALL_VIBRATE_PATTERN),
            created_at=datetime.now(timezone.utc),
        )
        self._post(notification)
        logger.warning("Fall alert raised", magnitude=round(magnitude, 2))
        return notification

    def recent(self) -> List[Notification]:
        return list(self._recent)

    def _post(self, notification: Notification) -> None:
        self._recent.append(notification)
        logger.info(
            "Notification posted",
            kind=notification.kind.value,
            notification_id=notification.notification_id,
        )
        for sink in self.sinks:
            try:
                sink(notification)
            except Exception as e:
                logger.error(
                    "Notification sink failed",
                    kind=notification.kind.value,
                    error=str(e),
                )
