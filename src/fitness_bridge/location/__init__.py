"""GPS location channel."""

from .permissions import PermissionManager
from .provider import LocationProvider
from .service import LocationService
from .stream import LocationStream

__all__ = ["LocationProvider", "LocationService", "LocationStream", "PermissionManager"]
