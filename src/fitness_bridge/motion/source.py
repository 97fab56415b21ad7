"""Host-fed accelerometer source."""

from typing import Callable, List

import structlog

from ..errors import SensorUnavailable
from ..models import MotionSample

logger = structlog.get_logger(__name__)

SampleListener = Callable[[MotionSample], None]


class AccelerometerSource:
    """Fans samples pushed by the host sensor subsystem out to listeners.

    Listener callbacks run synchronously inside `publish`; once a listener
    is unregistered it receives nothing further.
    """

    def __init__(self, available: bool = True):
        self.available = available
        self._listeners: List[SampleListener] = []

    def register_listener(self, listener: SampleListener) -> None:
        if not self.available:
            raise SensorUnavailable("No accelerometer on this device")
        self._listeners.append(listener)
        logger.debug("Accelerometer listener registered", listeners=len(self._listeners))

    def unregister_listener(self, listener: SampleListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
            logger.debug("Accelerometer listener unregistered", listeners=len(self._listeners))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, sample: MotionSample) -> int:
        """Deliver a sample to every listener; returns how many received it."""
        listeners = list(self._listeners)
        for listener in listeners:
            listener(sample)
        return len(listeners)
