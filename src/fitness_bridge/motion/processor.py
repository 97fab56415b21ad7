"""Per-sample motion pipeline: smoothing, steps, activity, falls, throttling."""

from typing import List, Optional, Union

import structlog

from .. import metrics
from ..config import Settings, settings as default_settings
from ..models import FallDetected, MotionSample, MotionUpdate
from ..notifications import Notifier
from .activity_classifier import ActivityClassifier
from .fall_detector import FallDetector
from .smoother import vector_magnitude
from .state import MotionState
from .step_detector import StepDetector

logger = structlog.get_logger(__name__)


class MotionProcessor:
    """Turns accelerometer samples into motion updates and fall alerts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        state: Optional[MotionState] = None,
    ):
        self.settings = settings or default_settings
        self.notifier = notifier or Notifier()
        self.state = state or MotionState(history_size=self.settings.history_size)
        self.step_detector = StepDetector(self.settings.step_threshold)
        self.classifier = ActivityClassifier(
            stationary_upper_bound=self.settings.stationary_upper_bound,
            walking_upper_bound=self.settings.walking_upper_bound,
            confidence_required=self.settings.activity_confidence_required,
        )
        self.fall_detector = FallDetector(
            threshold=self.settings.fall_threshold,
            cooldown_ms=self.settings.fall_cooldown_ms,
        )

    def process(self, sample: MotionSample) -> List[Union[FallDetected, MotionUpdate]]:
        """Run one sample through every stage and return the events it produced.

        A fall alert comes first; the throttled motion update (if this is the
        Nth sample) follows.
        """
        state = self.state
        events: List[Union[FallDetected, MotionUpdate]] = []

        magnitude = vector_magnitude(sample.x, sample.y, sample.z)
        avg_magnitude = state.magnitude_history.add(magnitude)
        metrics.samples_processed.inc()

        now = sample.timestamp_millis
        if self.fall_detector.detect(magnitude, now, state):
            self.notifier.fall_detected(magnitude)
            metrics.falls_detected.inc()
            events.append(FallDetected(magnitude=magnitude, timestamp_millis=now))

        if self.step_detector.detect(magnitude, state.last_magnitude):
            state.step_count += 1
            metrics.steps_detected.inc()
            if state.step_count >= self.settings.step_goal and not state.goal_notification_sent:
                self.notifier.step_goal_reached(state.step_count)
                state.goal_notification_sent = True
                logger.info("Step goal reached", steps=state.step_count)
        state.last_magnitude = magnitude

        activity_type = self.classifier.classify(avg_magnitude, state)

        state.sample_count += 1
        if state.sample_count >= self.settings.emit_every_n_samples:
            state.sample_count = 0
            metrics.motion_updates_emitted.inc()
            events.append(
                MotionUpdate(
                    step_count=state.step_count,
                    activity_type=activity_type,
                    avg_magnitude=avg_magnitude,
                )
            )

        return events

    def reset(self) -> None:
        """Apply a start/reset command to the session state."""
        if self.settings.full_reset_on_start:
            self.state.reset_all()
        else:
            self.state.reset_counters()
        logger.info("Motion session reset", full=self.settings.full_reset_on_start)
