"""Host-fed location provider."""

from typing import Callable, Dict, List, Optional, Tuple

import structlog

from ..errors import SecurityError
from ..models import LocationFix, LocationProviderName

logger = structlog.get_logger(__name__)

LocationListener = Callable[[LocationFix], None]


class LocationProvider:
    """Mirror of the OS location manager, fed with fixes by the host.

    `access_check` is consulted on every access, so a permission revoked
    after the caller's own check surfaces here as SecurityError.
    """

    def __init__(
        self,
        enabled: Optional[Dict[LocationProviderName, bool]] = None,
        access_check: Optional[Callable[[], bool]] = None,
    ):
        self._enabled = {name: True for name in LocationProviderName}
        if enabled:
            self._enabled.update(enabled)
        self.access_check = access_check
        self._last_known: Dict[LocationProviderName, LocationFix] = {}
        self._listeners: List[Tuple[LocationProviderName, LocationListener]] = []

    def _require_access(self) -> None:
        if self.access_check is not None and not self.access_check():
            raise SecurityError("Location access denied by the OS")

    def is_provider_enabled(self, provider: LocationProviderName) -> bool:
        return self._enabled.get(provider, False)

    def set_provider_enabled(self, provider: LocationProviderName, enabled: bool) -> None:
        self._enabled[provider] = enabled
        logger.info("Location provider toggled", provider=provider.value, enabled=enabled)

    def get_last_known_location(self, provider: LocationProviderName) -> Optional[LocationFix]:
        self._require_access()
        return self._last_known.get(provider)

    def request_location_updates(
        self,
        provider: LocationProviderName,
        min_time_ms: int,
        min_distance_m: float,
        listener: LocationListener,
    ) -> None:
        self._require_access()
        self._listeners.append((provider, listener))
        logger.debug(
            "Location updates requested",
            provider=provider.value,
            min_time_ms=min_time_ms,
            min_distance_m=min_distance_m,
        )

    def remove_updates(self, listener: LocationListener) -> None:
        self._listeners = [(p, cb) for p, cb in self._listeners if cb != listener]

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, fix: LocationFix, provider: LocationProviderName = LocationProviderName.GPS) -> int:
        """Record a new fix and deliver it to listeners on that provider."""
        if not self.is_provider_enabled(provider):
            logger.debug("Fix ignored, provider disabled", provider=provider.value)
            return 0
        self._last_known[provider] = fix
        listeners = [cb for p, cb in self._listeners if p == provider]
        for listener in listeners:
            listener(fix)
        return len(listeners)
