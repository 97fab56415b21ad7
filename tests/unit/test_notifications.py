"""Unit tests for local notifications."""

from unittest.mock import MagicMock

from fitness_bridge.models import NotificationKind, NotificationPriority
from fitness_bridge.notifications import (
    CHANNEL_ID,
    FALL_NOTIFICATION_ID,
    FALL_VIBRATE_PATTERN,
    STEP_GOAL_NOTIFICATION_ID,
    Notifier,
)


class TestNotifier:
    def test_step_goal_notification(self):
        notification = Notifier().step_goal_reached(30)

        assert notification.kind == NotificationKind.STEP_GOAL
        assert notification.notification_id == STEP_GOAL_NOTIFICATION_ID
        assert notification.channel_id == CHANNEL_ID
        assert notification.title == "Goal reached!"
        assert notification.text == "You have completed 30 steps. Keep it up!"
        assert notification.priority == NotificationPriority.HIGH

    def test_fall_notification(self):
        notification = Notifier().fall_detected(31.0)

        assert notification.kind == NotificationKind.FALL_DETECTED
        assert notification.notification_id == FALL_NOTIFICATION_ID
        assert notification.priority == NotificationPriority.MAX
        assert notification.vibrate_pattern == FALL_VIBRATE_PATTERN
        assert notification.auto_cancel is True

    def test_sinks_receive_notifications(self):
        sink = MagicMock()
        notifier = Notifier(sinks=[sink])

        notification = notifier.step_goal_reached(30)

        sink.assert_called_once_with(notification)

    def test_failing_sink_does_not_raise(self):
        good = MagicMock()
        notifier = Notifier(sinks=[MagicMock(side_effect=RuntimeError("renderer gone")), good])

        notifier.fall_detected(30.0)

        good.assert_called_once()
        assert len(notifier.recent()) == 1

    def test_history_is_bounded(self):
        notifier = Notifier(history_size=2)
        notifier.step_goal_reached(30)
        notifier.fall_detected(30.0)
        notifier.fall_detected(31.0)

        assert [n.kind for n in notifier.recent()] == [
            NotificationKind.FALL_DETECTED,
            NotificationKind.FALL_DETECTED,
        ]
