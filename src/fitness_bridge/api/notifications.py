"""Recently posted local notifications."""

from fastapi import APIRouter, Depends

from ..bridge import SensorBridge
from .deps import get_bridge

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(bridge: SensorBridge = Depends(get_bridge)) -> list:
    return [n.model_dump(mode="json") for n in bridge.notifier.recent()]
