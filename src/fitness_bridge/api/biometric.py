"""Biometric authentication endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..biometric import HostBiometricBackend
from ..bridge import SensorBridge
from .deps import get_bridge

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/biometric", tags=["biometric"])


class PromptError(BaseModel):
    error_code: int
    message: str = ""


@router.get("/support")
async def check_biometric_support(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    return {"supported": bridge.biometrics.check_support()}


@router.post("/authenticate")
async def authenticate(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    """Show the prompt and wait for the host to resolve it."""
    authenticated = await bridge.biometrics.authenticate()
    return {"authenticated": authenticated}


def _host_backend(bridge: SensorBridge) -> HostBiometricBackend:
    backend = bridge.biometric_backend
    if not isinstance(backend, HostBiometricBackend):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Biometric prompt is not host-driven",
        )
    if not backend.prompt_pending:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No biometric prompt is showing",
        )
    return backend


@router.post("/prompt/success")
async def prompt_succeeded(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    _host_backend(bridge).deliver_success()
    return {"status": "delivered"}


@router.post("/prompt/failure")
async def prompt_failed(bridge: SensorBridge = Depends(get_bridge)) -> dict:
    """An unrecognised attempt; the prompt stays open."""
    _host_backend(bridge).deliver_failure()
    return {"status": "delivered"}


@router.post("/prompt/error")
async def prompt_error(
    error: PromptError,
    bridge: SensorBridge = Depends(get_bridge),
) -> dict:
    logger.info("Biometric prompt error delivered", error_code=error.error_code)
    _host_backend(bridge).deliver_error(error.error_code, error.message)
    return {"status": "delivered"}
