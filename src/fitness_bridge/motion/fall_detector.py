"""Fall detection on peak acceleration."""

from ..config import settings
from .state import MotionState


class FallDetector:
    """Edge-triggers a fall on a magnitude spike, rate-limited by a cooldown.

    The cooldown suppresses repeated alerts from one sustained episode and
    also any genuine second fall inside the window. A session that has not
    raised a fall yet is always armed, whatever clock the timestamps use.
    """

    def __init__(
        self,
        threshold: float = settings.fall_threshold,
        cooldown_ms: int = settings.fall_cooldown_ms,
    ):
        self.threshold = threshold
        self.cooldown_ms = cooldown_ms

    def detect(self, magnitude: float, now: int, state: MotionState) -> bool:
        if magnitude <= self.threshold:
            return False
        last = state.last_fall_detection_time
        if last is not None and now - last <= self.cooldown_ms:
            return False
        state.last_fall_detection_time = now
        return True
