"""Domain layer: registration statuses, observable state and the orchestrator."""

from __future__ import annotations

from .errors import (
    BackendError,
    PermissionDeniedError,
    RegistrationError,
    SessionUnavailableError,
    describe_error,
)
from .orchestrator import DEFAULT_SETTLE_DELAY_SECONDS, RegistrationOrchestrator
from .state import ObservableRegistrationState, RegistrationSnapshot, StateChange
from .status import (
    ANOTHER_DEVICE_MESSAGE,
    DEREGISTRATION_INCOMPLETE_MESSAGE,
    REGISTRATION_INCOMPLETE_MESSAGE,
    EffectiveState,
    RegistrationStatus,
    merge_statuses,
)

__all__ = [
    "ANOTHER_DEVICE_MESSAGE",
    "DEFAULT_SETTLE_DELAY_SECONDS",
    "DEREGISTRATION_INCOMPLETE_MESSAGE",
    "REGISTRATION_INCOMPLETE_MESSAGE",
    "BackendError",
    "EffectiveState",
    "ObservableRegistrationState",
    "PermissionDeniedError",
    "RegistrationError",
    "RegistrationOrchestrator",
    "RegistrationSnapshot",
    "RegistrationStatus",
    "SessionUnavailableError",
    "StateChange",
    "describe_error",
    "merge_statuses",
]
