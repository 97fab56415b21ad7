"""Biometric authentication boundary."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog

from .errors import AuthenticationInProgress
from .models import AuthenticationOutcome, AuthenticationResult, BiometricStatus

logger = structlog.get_logger(__name__)

# Host error codes, as reported by the platform biometric prompt
ERROR_HW_UNAVAILABLE = 1
ERROR_CANCELED = 5
ERROR_LOCKOUT = 7
ERROR_LOCKOUT_PERMANENT = 9
ERROR_USER_CANCELED = 10
ERROR_HW_NOT_PRESENT = 12
ERROR_NEGATIVE_BUTTON = 13

_OUTCOME_BY_ERROR = {
    ERROR_CANCELED: AuthenticationOutcome.CANCELLED,
    ERROR_USER_CANCELED: AuthenticationOutcome.CANCELLED,
    ERROR_NEGATIVE_BUTTON: AuthenticationOutcome.CANCELLED,
    ERROR_LOCKOUT: AuthenticationOutcome.LOCKOUT,
    ERROR_LOCKOUT_PERMANENT: AuthenticationOutcome.LOCKOUT,
    ERROR_HW_UNAVAILABLE: AuthenticationOutcome.HARDWARE_ERROR,
    ERROR_HW_NOT_PRESENT: AuthenticationOutcome.HARDWARE_ERROR,
}


def outcome_for_error(error_code: int) -> AuthenticationOutcome:
    return _OUTCOME_BY_ERROR.get(error_code, AuthenticationOutcome.ERROR)


@dataclass(frozen=True)
class PromptInfo:
    title: str = "Biometric authentication"
    subtitle: str = "Use your fingerprint"
    description: str = "Place your finger on the sensor"
    negative_button_text: str = "Cancel"


class AuthenticationCallback(ABC):
    @abstractmethod
    def on_succeeded(self) -> None: ...

    @abstractmethod
    def on_error(self, error_code: int, message: str) -> None: ...

    @abstractmethod
    def on_failed(self) -> None: ...


class BiometricBackend(ABC):
    """What the host biometric subsystem must provide."""

    @abstractmethod
    def can_authenticate(self) -> BiometricStatus:
        """Whether strong biometrics are usable right now."""

    @abstractmethod
    def show_prompt(self, prompt: PromptInfo, callback: AuthenticationCallback) -> None:
        """Show the prompt; the host later calls back exactly once with a
        success or error, and any number of times with a failed attempt."""


class HostBiometricBackend(BiometricBackend):
    """Backend whose prompt is resolved by the host through `deliver_*`."""

    def __init__(self, status: BiometricStatus = BiometricStatus.NONE_ENROLLED):
        self.status = status
        self.prompt: Optional[PromptInfo] = None
        self._callback: Optional[AuthenticationCallback] = None

    def can_authenticate(self) -> BiometricStatus:
        return self.status

    def show_prompt(self, prompt: PromptInfo, callback: AuthenticationCallback) -> None:
        self.prompt = prompt
        self._callback = callback
        logger.info("Biometric prompt shown", title=prompt.title)

    @property
    def prompt_pending(self) -> bool:
        return self._callback is not None

    def deliver_success(self) -> None:
        callback = self._take_callback()
        callback.on_succeeded()

    def deliver_error(self, error_code: int, message: str = "") -> None:
        callback = self._take_callback()
        callback.on_error(error_code, message)

    def deliver_failure(self) -> None:
        if self._callback is None:
            raise RuntimeError("No biometric prompt is showing")
        self._callback.on_failed()

    def _take_callback(self) -> AuthenticationCallback:
        if self._callback is None:
            raise RuntimeError("No biometric prompt is showing")
        callback, self._callback, self.prompt = self._callback, None, None
        return callback


class _PendingAuthentication(AuthenticationCallback):
    def __init__(self, future: asyncio.Future):
        self.future = future
        self.failed_attempts = 0

    def _resolve(self, result: AuthenticationResult) -> None:
        if not self.future.done():
            self.future.set_result(result)

    def on_succeeded(self) -> None:
        self._resolve(AuthenticationResult(outcome=AuthenticationOutcome.SUCCEEDED))

    def on_error(self, error_code: int, message: str) -> None:
        self._resolve(
            AuthenticationResult(
                outcome=outcome_for_error(error_code),
                error_code=error_code,
                message=message or None,
            )
        )

    def on_failed(self) -> None:
        # Unrecognised biometric; the prompt stays up and the user may retry
        self.failed_attempts += 1


class BiometricAuthenticator:
    """One-shot biometric authentication with a single outstanding request."""

    def __init__(self, backend: BiometricBackend, prompt: Optional[PromptInfo] = None):
        self.backend = backend
        self.prompt = prompt or PromptInfo()
        self._pending: Optional[_PendingAuthentication] = None

    def check_support(self) -> bool:
        return self.backend.can_authenticate() == BiometricStatus.SUCCESS

    @property
    def in_progress(self) -> bool:
        return self._pending is not None

    async def authenticate_detailed(self) -> AuthenticationResult:
        """Show the prompt and wait for its terminal outcome."""
        if self._pending is not None:
            raise AuthenticationInProgress()

        future = asyncio.get_running_loop().create_future()
        pending = _PendingAuthentication(future)
        self._pending = pending
        try:
            self.backend.show_prompt(self.prompt, pending)
            result = await future
        finally:
            self._pending = None

        logger.info(
            "Biometric authentication finished",
            outcome=result.outcome.value,
            failed_attempts=pending.failed_attempts,
        )
        return result

    async def authenticate(self) -> bool:
        """Boolean surface: every non-success outcome is False."""
        result = await self.authenticate_detailed()
        return result.succeeded
