"""Wires sensor sources, channels and publishers from settings."""

from typing import Optional

import structlog

from .biometric import BiometricAuthenticator, BiometricBackend, HostBiometricBackend
from .config import Settings, settings as default_settings
from .health import HealthChecker, kafka_broker_reachable
from .kafka import EventProducer, KafkaEventSink
from .location import LocationProvider, LocationService, LocationStream, PermissionManager
from .location.permissions import LOCATION_PERMISSIONS, PermissionRequester, auto_grant
from .models import LocationProviderName
from .motion import AccelerometerChannel, AccelerometerSource
from .notifications import Notifier

logger = structlog.get_logger(__name__)


class SensorBridge:
    """Everything one device's bridge needs, built once per process."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        biometric_backend: Optional[BiometricBackend] = None,
        permission_requester: Optional[PermissionRequester] = None,
    ):
        self.settings = settings or default_settings
        s = self.settings

        self.notifier = Notifier(s.notification_history_size)

        self.producer: Optional[EventProducer] = EventProducer(s) if s.kafka_enabled else None
        extra_sinks = [KafkaEventSink(self.producer)] if self.producer else []

        self.accelerometer_source = AccelerometerSource(available=s.accelerometer_available)
        self.accelerometer = AccelerometerChannel(
            self.accelerometer_source, s, self.notifier, extra_sinks
        )

        if permission_requester is None and s.grant_permission_on_request:
            permission_requester = auto_grant
        self.permissions = PermissionManager(
            granted=LOCATION_PERMISSIONS if s.location_permission_granted else (),
            requester=permission_requester,
        )
        self.location_provider = LocationProvider(
            enabled={
                LocationProviderName.GPS: s.gps_provider_enabled,
                LocationProviderName.NETWORK: s.network_provider_enabled,
            },
            access_check=self.permissions.has_location_permission,
        )
        self.location = LocationService(self.location_provider, self.permissions)
        self.location_stream = LocationStream(
            self.location_provider, self.permissions, s, extra_sinks
        )

        self.biometric_backend = biometric_backend or HostBiometricBackend(s.biometric_status)
        self.biometrics = BiometricAuthenticator(self.biometric_backend)

        self.health = HealthChecker()
        self.health.add_detail("streams", self.stream_status)
        if self.producer is not None:
            producer = self.producer
            self.health.add_check("kafka_producer", lambda: producer.started)
            self.health.add_check(
                "kafka_broker",
                lambda: kafka_broker_reachable(s.kafka_bootstrap_servers),
                critical=False,
            )

    def stream_status(self) -> dict:
        """Snapshot of both event streams for the readiness report."""
        subscription = self.accelerometer.subscription
        return {
            "accelerometer": {
                "available": self.accelerometer_source.available,
                "phase": self.accelerometer.phase.value,
                "listening": subscription is not None and subscription.active,
                "dropped": subscription.dropped if subscription is not None else 0,
            },
            "location": {
                "permission_granted": self.permissions.has_location_permission(),
                "subscriptions": len(self.location_stream.subscriptions),
            },
        }

    async def start(self) -> None:
        if self.producer is not None:
            await self.producer.start()
        logger.info(
            "Sensor bridge started",
            kafka_enabled=self.producer is not None,
            accelerometer_available=self.accelerometer_source.available,
        )

    async def stop(self) -> None:
        self.accelerometer.close()
        self.location_stream.close()
        if self.producer is not None:
            await self.producer.stop()
        logger.info("Sensor bridge stopped")
