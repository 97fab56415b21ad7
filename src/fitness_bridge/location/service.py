"""One-shot location operations: provider state, permissions, current fix."""

import structlog

from ..errors import LocationUnavailable, PermissionDenied
from ..models import LocationFix, LocationProviderName
from .permissions import PermissionManager
from .provider import LocationProvider

logger = structlog.get_logger(__name__)


class LocationService:
    """Method-call side of the GPS channel."""

    def __init__(self, provider: LocationProvider, permissions: PermissionManager):
        self.provider = provider
        self.permissions = permissions

    def is_gps_enabled(self) -> bool:
        return self.provider.is_provider_enabled(LocationProviderName.GPS)

    def request_permissions(self) -> bool:
        return self.permissions.request_location_permissions()

    def get_current_location(self) -> LocationFix:
        """Last known GPS fix, falling back to the network provider.

        Raises:
            PermissionDenied: location permission not granted
            LocationUnavailable: neither provider has a fix
            SecurityError: the OS refused access despite the permission check
        """
        if not self.permissions.has_location_permission():
            raise PermissionDenied("Location permission not granted")

        fix = self.provider.get_last_known_location(LocationProviderName.GPS)
        if fix is None:
            fix = self.provider.get_last_known_location(LocationProviderName.NETWORK)

        if fix is None:
            logger.info("No last known location")
            raise LocationUnavailable("No location available")

        return fix
