"""Location event stream: permission-gated pass-through of GPS fixes."""

from typing import Iterable, List, Optional

import structlog

from .. import metrics
from ..config import Settings, settings as default_settings
from ..errors import PermissionDenied, SecurityError
from ..models import LocationFix, LocationProviderName
from ..streaming import EventSink, FanoutSink, StreamSubscription
from .permissions import PermissionManager
from .provider import LocationProvider

logger = structlog.get_logger(__name__)


def relay_fix(fix: LocationFix) -> List[LocationFix]:
    """Fixes are relayed as received: no filtering, dedup or smoothing."""
    metrics.location_fixes_relayed.inc()
    return [fix]


class LocationStream:
    """Event side of the GPS channel."""

    def __init__(
        self,
        provider: LocationProvider,
        permissions: PermissionManager,
        settings: Optional[Settings] = None,
        extra_sinks: Iterable[EventSink] = (),
    ):
        self.provider = provider
        self.permissions = permissions
        self.settings = settings or default_settings
        self.extra_sinks = list(extra_sinks)
        self.subscriptions: List[StreamSubscription] = []

    async def listen(self, sink: EventSink) -> Optional[StreamSubscription]:
        """Attach to the GPS provider and relay fixes to `sink`.

        Without permission the sink gets PermissionDenied and nothing is
        attached. A SecurityError from the provider is passed to the sink the
        same way. Returns None in both cases.
        """
        if not self.permissions.has_location_permission():
            logger.warning("Location stream refused, permission not granted")
            await sink.error(PermissionDenied("Location permission not granted"))
            return None

        subscription = StreamSubscription(
            "location",
            relay_fix,
            FanoutSink([sink, *self.extra_sinks]),
            maxsize=self.settings.stream_queue_size,
        )
        listener = subscription.offer

        try:
            self.provider.request_location_updates(
                LocationProviderName.GPS,
                self.settings.location_update_interval_ms,
                self.settings.location_min_distance_m,
                listener,
            )
        except SecurityError as e:
            logger.error("Location updates rejected", error=str(e))
            await sink.error(e)
            return None

        subscription.set_detach(lambda: self._detach(subscription, listener))
        subscription.start()
        self.subscriptions.append(subscription)
        return subscription

    def _detach(self, subscription: StreamSubscription, listener) -> None:
        self.provider.remove_updates(listener)
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)

    def close(self) -> None:
        for subscription in list(self.subscriptions):
            subscription.cancel()
