"""Location permission state."""

from typing import Callable, Iterable, List, Optional, Set

import structlog

logger = structlog.get_logger(__name__)

ACCESS_FINE_LOCATION = "ACCESS_FINE_LOCATION"
ACCESS_COARSE_LOCATION = "ACCESS_COARSE_LOCATION"
LOCATION_PERMISSIONS = [ACCESS_FINE_LOCATION, ACCESS_COARSE_LOCATION]

PermissionRequester = Callable[[List[str]], Iterable[str]]


class PermissionManager:
    """Tracks granted permissions and forwards requests to the host.

    Only fine location counts as "has location permission". A request is
    answered with the permission state right after asking, which on a real
    device is usually still ungranted because the OS dialog is asynchronous.
    """

    def __init__(
        self,
        granted: Iterable[str] = (),
        requester: Optional[PermissionRequester] = None,
    ):
        self._granted: Set[str] = set(granted)
        self.requester = requester

    def has_location_permission(self) -> bool:
        return ACCESS_FINE_LOCATION in self._granted

    def request_location_permissions(self) -> bool:
        if self.has_location_permission():
            return True

        if self.requester is None:
            logger.warning("Location permission required", permissions=LOCATION_PERMISSIONS)
        else:
            granted = set(self.requester(list(LOCATION_PERMISSIONS)))
            self._granted.update(granted & set(LOCATION_PERMISSIONS))
            logger.info("Location permissions requested", granted=sorted(granted))

        return self.has_location_permission()

    def grant(self, permission: str) -> None:
        self._granted.add(permission)
        logger.info("Permission granted", permission=permission)

    def revoke(self, permission: str) -> None:
        self._granted.discard(permission)
        logger.warning("Permission revoked", permission=permission)


def auto_grant(permissions: List[str]) -> List[str]:
    """Requester that grants whatever is asked, for hosts without a dialog."""
    return permissions
