"""Global test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from fitness_bridge.biometric import HostBiometricBackend
from fitness_bridge.bridge import SensorBridge
from fitness_bridge.config import Settings
from fitness_bridge.location.permissions import LOCATION_PERMISSIONS, PermissionManager
from fitness_bridge.main import create_app
from fitness_bridge.models import BiometricStatus
from fitness_bridge.notifications import Notifier
from fitness_bridge.streaming import QueueEventSink


@pytest.fixture()
def settings():
    """Settings with defaults, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture()
def notifier():
    return Notifier()


@pytest.fixture()
def sink():
    return QueueEventSink()


@pytest.fixture()
def granted_permissions():
    return PermissionManager(granted=LOCATION_PERMISSIONS)


@pytest.fixture()
def biometric_backend():
    return HostBiometricBackend(BiometricStatus.SUCCESS)


@pytest.fixture()
def bridge(settings, biometric_backend):
    return SensorBridge(settings, biometric_backend=biometric_backend)


@pytest.fixture()
def app(settings, bridge):
    return create_app(settings, bridge)


@pytest.fixture()
def client(app):
    """Test client running the app lifespan on one event loop."""
    with TestClient(app) as client:
        yield client
