"""Accelerometer event stream and its start/stop/reset control surface."""

from typing import Iterable, Optional

import structlog

from ..config import Settings, settings as default_settings
from ..errors import SensorUnavailable, StreamReplaced, UnsupportedOperation
from ..models import ControlCommand, SessionPhase
from ..notifications import Notifier
from ..streaming import EventSink, FanoutSink, StreamSubscription
from .processor import MotionProcessor
from .source import AccelerometerSource

logger = structlog.get_logger(__name__)


class AccelerometerChannel:
    """Owns the single accelerometer listening session.

    Each `listen` builds a fresh MotionProcessor (and so a fresh
    MotionState); a new listener replaces the previous one.
    """

    def __init__(
        self,
        source: AccelerometerSource,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        extra_sinks: Iterable[EventSink] = (),
    ):
        self.source = source
        self.settings = settings or default_settings
        self.notifier = notifier or Notifier(self.settings.notification_history_size)
        self.extra_sinks = list(extra_sinks)
        self.phase = SessionPhase.IDLE
        self.processor: Optional[MotionProcessor] = None
        self.subscription: Optional[StreamSubscription] = None

    async def listen(self, sink: EventSink) -> StreamSubscription:
        """Start a session delivering motion events to `sink`."""
        if not self.source.available:
            raise SensorUnavailable("No accelerometer on this device")

        previous = self.subscription
        if previous is not None and previous.active:
            logger.info("Replacing existing accelerometer subscription")
            previous.cancel()
            await previous.sink.error(StreamReplaced())

        processor = MotionProcessor(self.settings, self.notifier)
        subscription = StreamSubscription(
            "accelerometer",
            processor.process,
            FanoutSink([sink, *self.extra_sinks]),
            maxsize=self.settings.stream_queue_size,
        )
        listener = subscription.offer
        self.source.register_listener(listener)
        subscription.set_detach(lambda: self._detach(subscription, listener))
        subscription.start()

        self.processor = processor
        self.subscription = subscription
        return subscription

    def _detach(self, subscription: StreamSubscription, listener) -> None:
        self.source.unregister_listener(listener)
        if self.subscription is subscription:
            self.subscription = None
            self.processor = None

    def handle_command(self, command: str) -> None:
        """Apply a control command; unknown names raise UnsupportedOperation."""
        try:
            parsed = ControlCommand(command)
        except ValueError:
            raise UnsupportedOperation(f"Unknown accelerometer command: {command}")

        if parsed is ControlCommand.START:
            self.phase = SessionPhase.ACTIVE
            self._reset()
        elif parsed is ControlCommand.STOP:
            self.phase = SessionPhase.IDLE
        else:
            self._reset()

        logger.info("Accelerometer control", command=parsed.value, phase=self.phase.value)

    def _reset(self) -> None:
        if self.processor is not None:
            self.processor.reset()

    def close(self) -> None:
        if self.subscription is not None:
            self.subscription.cancel()
