"""Activity classification with confidence hysteresis."""

from ..config import settings
from ..models import ActivityType
from .state import MotionState


class ActivityClassifier:
    """Maps the smoothed magnitude to an activity label.

    A raw candidate only becomes the committed label once the same candidate
    has been seen on `confidence_required` consecutive samples after the first
    one. Agreement is counted on the candidate sequence, so the committed
    label may lag behind and then jump straight to the new candidate.
    """

    def __init__(
        self,
        stationary_upper_bound: float = settings.stationary_upper_bound,
        walking_upper_bound: float = settings.walking_upper_bound,
        confidence_required: int = settings.activity_confidence_required,
    ):
        self.stationary_upper_bound = stationary_upper_bound
        self.walking_upper_bound = walking_upper_bound
        self.confidence_required = confidence_required

    def candidate(self, avg_magnitude: float) -> ActivityType:
        if avg_magnitude < self.stationary_upper_bound:
            return ActivityType.STATIONARY
        if avg_magnitude < self.walking_upper_bound:
            return ActivityType.WALKING
        return ActivityType.RUNNING

    def classify(self, avg_magnitude: float, state: MotionState) -> ActivityType:
        """Update hysteresis state and return the committed label."""
        candidate = self.candidate(avg_magnitude)

        if candidate == state.last_candidate:
            state.activity_confidence += 1
        else:
            state.activity_confidence = 0
        state.last_candidate = candidate

        if state.activity_confidence >= self.confidence_required:
            state.last_activity_type = candidate

        return state.last_activity_type
