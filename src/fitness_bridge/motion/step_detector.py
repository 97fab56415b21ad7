"""Step detection on raw acceleration magnitude."""

from ..config import settings


class StepDetector:
    """Signals a step when the magnitude rises through the threshold.

    Works on the raw magnitude, not the smoothed average, and applies no
    debounce: noise oscillating around the threshold can overcount.
    """

    def __init__(self, threshold: float = settings.step_threshold):
        self.threshold = threshold

    def detect(self, magnitude: float, last_magnitude: float) -> bool:
        return magnitude > self.threshold and last_magnitude <= self.threshold
