"""Failure taxonomy raised by registration collaborators."""

from __future__ import annotations


class RegistrationError(RuntimeError):
    """Base class for failures reported by sessions, credentials or backends."""


class SessionUnavailableError(RegistrationError):
    """Raised when a session token cannot be obtained."""


class PermissionDeniedError(RegistrationError):
    """Raised when notification permission is refused or no device token exists."""


class BackendError(RegistrationError):
    """Raised when a registration backend reports an application-level error."""

    def __init__(self, message: str, *, backend: str, code: int | None = None) -> None:
        super().__init__(message)
        self.backend = backend
        self.code = code


def describe_error(exc: BaseException) -> str:
    """Return the human readable cause embedded in published error messages."""

    text = str(exc).strip()
    return text or type(exc).__name__
