"""Moving-average smoothing of acceleration magnitudes."""

import math
from collections import deque
from typing import List

from ..models import MotionSample


def vector_magnitude(x: float, y: float, z: float) -> float:
    """Euclidean norm of a 3-axis acceleration vector."""
    return math.sqrt(x * x + y * y + z * z)


class MagnitudeSmoother:
    """Fixed-capacity FIFO of recent magnitudes with a running mean."""

    def __init__(self, history_size: int = 10):
        self.history_size = history_size
        self._history = deque(maxlen=history_size)

    def push(self, sample: MotionSample) -> float:
        """Add a sample's magnitude and return the new average."""
        return self.add(vector_magnitude(sample.x, sample.y, sample.z))

    def add(self, magnitude: float) -> float:
        self._history.append(magnitude)
        return self.average

    @property
    def average(self) -> float:
        if not self._history:
            return 0.0
        return sum(self._history) / len(self._history)

    def values(self) -> List[float]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)
