"""Unit tests for biometric authentication."""

import asyncio

import pytest

from fitness_bridge.biometric import (
    ERROR_HW_NOT_PRESENT,
    ERROR_LOCKOUT,
    ERROR_USER_CANCELED,
    BiometricAuthenticator,
    HostBiometricBackend,
    outcome_for_error,
)
from fitness_bridge.errors import AuthenticationInProgress
from fitness_bridge.models import AuthenticationOutcome, BiometricStatus


@pytest.fixture()
def authenticator(biometric_backend):
    return BiometricAuthenticator(biometric_backend)


class TestSupport:
    def test_supported_when_enrolled(self, authenticator):
        assert authenticator.check_support() is True

    @pytest.mark.parametrize(
        "status",
        [
            BiometricStatus.NONE_ENROLLED,
            BiometricStatus.NO_HARDWARE,
            BiometricStatus.HARDWARE_UNAVAILABLE,
        ],
    )
    def test_unsupported_statuses(self, status):
        authenticator = BiometricAuthenticator(HostBiometricBackend(status))
        assert authenticator.check_support() is False


class TestErrorMapping:
    def test_known_codes(self):
        assert outcome_for_error(ERROR_USER_CANCELED) == AuthenticationOutcome.CANCELLED
        assert outcome_for_error(ERROR_LOCKOUT) == AuthenticationOutcome.LOCKOUT
        assert outcome_for_error(ERROR_HW_NOT_PRESENT) == AuthenticationOutcome.HARDWARE_ERROR

    def test_unknown_code(self):
        assert outcome_for_error(99) == AuthenticationOutcome.ERROR


class TestAuthenticate:
    """Test the prompt lifecycle."""

    @pytest.mark.asyncio()
    async def test_success(self, authenticator, biometric_backend):
        task = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)
        assert biometric_backend.prompt_pending is True

        biometric_backend.deliver_success()

        assert await task is True
        assert authenticator.in_progress is False

    @pytest.mark.asyncio()
    async def test_error_is_false_at_boolean_surface(self, authenticator, biometric_backend):
        task = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)

        biometric_backend.deliver_error(ERROR_USER_CANCELED, "Cancelled by user")

        assert await task is False

    @pytest.mark.asyncio()
    async def test_detailed_keeps_outcome(self, authenticator, biometric_backend):
        task = asyncio.create_task(authenticator.authenticate_detailed())
        await asyncio.sleep(0)

        biometric_backend.deliver_error(ERROR_LOCKOUT, "Too many attempts")

        result = await task
        assert result.outcome == AuthenticationOutcome.LOCKOUT
        assert result.error_code == ERROR_LOCKOUT
        assert result.message == "Too many attempts"
        assert result.succeeded is False

    @pytest.mark.asyncio()
    async def test_failed_attempt_allows_retry(self, authenticator, biometric_backend):
        task = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)

        biometric_backend.deliver_failure()
        await asyncio.sleep(0)
        assert task.done() is False

        biometric_backend.deliver_success()
        assert await task is True

    @pytest.mark.asyncio()
    async def test_second_request_rejected_while_pending(self, authenticator, biometric_backend):
        task = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)

        with pytest.raises(AuthenticationInProgress):
            await authenticator.authenticate()

        biometric_backend.deliver_success()
        assert await task is True

    @pytest.mark.asyncio()
    async def test_new_request_after_completion(self, authenticator, biometric_backend):
        first = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)
        biometric_backend.deliver_error(ERROR_USER_CANCELED)
        assert await first is False

        second = asyncio.create_task(authenticator.authenticate())
        await asyncio.sleep(0)
        biometric_backend.deliver_success()
        assert await second is True

    def test_delivery_without_prompt(self, biometric_backend):
        with pytest.raises(RuntimeError):
            biometric_backend.deliver_success()
        with pytest.raises(RuntimeError):
            biometric_backend.deliver_failure()
