"""
Kafka publication of classified sensor events
"""

from typing import Any, Dict, Optional, Tuple

import orjson
import structlog
from aiokafka import AIOKafkaProducer

from fitness_bridge.config import Settings
from fitness_bridge.errors import BridgeError
from fitness_bridge.models import FallDetected, LocationFix, MotionUpdate
from fitness_bridge.streaming import EventSink

logger = structlog.get_logger(__name__)


class EventProducer:
    """Async Kafka producer with the bridge's standard configuration"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.producer: Optional[AIOKafkaProducer] = None

    @property
    def started(self) -> bool:
        return self.producer is not None

    async def start(self) -> None:
        """Start the Kafka producer"""
        self.producer = AIOKafkaProducer(
            bootstrap_servers=self.settings.kafka_bootstrap_servers,
            value_serializer=lambda v: orjson.dumps(v, default=str),
            key_serializer=lambda k: k.encode("utf-8") if k else None,
            acks="all",
            enable_idempotence=True,
            compression_type="lz4",
        )
        await self.producer.start()
        logger.info(
            "Kafka producer started",
            bootstrap_servers=self.settings.kafka_bootstrap_servers,
        )

    async def stop(self) -> None:
        """Stop the Kafka producer"""
        if self.producer:
            await self.producer.stop()
            self.producer = None
            logger.info("Kafka producer stopped")

    async def send_message(
        self,
        topic: str,
        value: Dict[str, Any],
        key: Optional[str] = None,
        event_type: Optional[str] = None,
    ) -> None:
        """Send one event and wait for the broker ack

        The event type travels as an `event_type` header so consumers can
        route without decoding the value.
        """
        if not self.producer:
            raise RuntimeError("Producer not started")

        full_topic = self.settings.get_kafka_topic(topic)
        headers = [("event_type", event_type.encode("utf-8"))] if event_type else None

        try:
            await self.producer.send_and_wait(
                full_topic,
                value=value,
                key=key,
                headers=headers,
            )
            logger.debug("Event sent to Kafka", topic=full_topic, event_type=event_type)
        except Exception as e:
            logger.error(
                "Failed to send message to Kafka",
                topic=full_topic,
                key=key,
                error=str(e),
                exc_info=True,
            )
            raise


class KafkaEventSink(EventSink):
    """Mirrors stream events onto Kafka topics.

    Publishing failures are logged and do not interrupt the subscriber's
    stream.
    """

    def __init__(self, producer: EventProducer, device_id: Optional[str] = None):
        self.producer = producer
        self.device_id = device_id

    def _route(self, event: Any) -> Optional[Tuple[str, str]]:
        """Topic and event type for an event, or None if it is not published."""
        settings = self.producer.settings
        if isinstance(event, MotionUpdate):
            return settings.kafka_motion_topic, event.type
        if isinstance(event, FallDetected):
            return settings.kafka_fall_topic, event.type
        if isinstance(event, LocationFix):
            return settings.kafka_location_topic, "location_fix"
        return None

    async def emit(self, event: Any) -> None:
        route = self._route(event)
        if route is None or not self.producer.started:
            return
        topic, event_type = route
        try:
            await self.producer.send_message(
                topic, event.to_channel(), key=self.device_id, event_type=event_type
            )
        except Exception as e:
            logger.warning("Dropped event after Kafka failure", topic=topic, error=str(e))

    async def error(self, error: BridgeError) -> None:
        logger.debug("Stream error not published to Kafka", code=error.code)
