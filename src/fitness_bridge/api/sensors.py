"""Host-side ingress: raw samples, fixes, provider and permission state."""

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from ..bridge import SensorBridge
from ..models import LocationFix, LocationProviderName, SampleBatch
from .deps import get_bridge

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/sensor", tags=["sensors"])


class ProviderState(BaseModel):
    enabled: bool


class PermissionState(BaseModel):
    granted: bool


@router.post("/accelerometer", status_code=status.HTTP_202_ACCEPTED)
async def push_accelerometer_samples(
    batch: SampleBatch,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    """Deliver samples to the listening session, oldest first."""
    delivered = 0
    for sample in batch.samples:
        delivered = bridge.accelerometer_source.publish(sample)
    logger.debug("Accelerometer samples pushed", count=len(batch.samples), listeners=delivered)
    return {"status": "accepted", "samples": len(batch.samples), "listeners": delivered}


@router.post("/location", status_code=status.HTTP_202_ACCEPTED)
async def push_location_fix(
    fix: LocationFix,
    provider: LocationProviderName = LocationProviderName.GPS,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    delivered = bridge.location_provider.publish(fix, provider)
    return {"status": "accepted", "provider": provider.value, "listeners": delivered}


@router.put("/location/providers/{provider}")
async def set_provider_state(
    provider: LocationProviderName,
    state: ProviderState,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    bridge.location_provider.set_provider_enabled(provider, state.enabled)
    return {"provider": provider.value, "enabled": state.enabled}


@router.put("/permissions/{permission}")
async def set_permission_state(
    permission: str,
    state: PermissionState,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    """Mirror a permission change made in the OS settings or dialog."""
    if state.granted:
        bridge.permissions.grant(permission)
    else:
        bridge.permissions.revoke(permission)
    return {"permission": permission, "granted": state.granted}
