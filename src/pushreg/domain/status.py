"""Registration status model and the rule that merges two backend views."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

ANOTHER_DEVICE_MESSAGE: Final[str] = "Registered on another device."
REGISTRATION_INCOMPLETE_MESSAGE: Final[str] = "Registration did not complete successfully."
DEREGISTRATION_INCOMPLETE_MESSAGE: Final[str] = "De-registration did not complete successfully."

REGISTRATION_FAILED_PREFIX: Final[str] = "Registration failed: "
DEREGISTRATION_FAILED_PREFIX: Final[str] = "De-registration failed: "
LOAD_FAILED_PREFIX: Final[str] = "Failed to load status: "


class RegistrationStatus(StrEnum):
    """One backend's raw view of the device registration."""

    REGISTERED = "registered"
    UNREGISTERED = "unregistered"
    REGISTERED_ELSEWHERE = "registered_elsewhere"


@dataclass(slots=True, frozen=True)
class EffectiveState:
    """User-facing registration flag plus an optional informational message."""

    is_registered: bool
    info_message: str | None = None


def merge_statuses(push: RegistrationStatus, vendor: RegistrationStatus) -> EffectiveState:
    """Combine the push-authentication and vendor statuses into one effective state.

    Rules are evaluated in order and the first match wins:

    1. The push backend reporting ``REGISTERED_ELSEWHERE`` always yields an
       unregistered state with :data:`ANOTHER_DEVICE_MESSAGE`; the vendor
       status is not consulted.
    2. Both backends reporting ``REGISTERED`` yields a registered state.
    3. Anything else, including disagreement, yields an unregistered state.

    The merge is asymmetric: a vendor ``REGISTERED_ELSEWHERE`` is treated like
    any other non-registered value.
    """

    if push is RegistrationStatus.REGISTERED_ELSEWHERE:
        return EffectiveState(is_registered=False, info_message=ANOTHER_DEVICE_MESSAGE)
    if push is RegistrationStatus.REGISTERED and vendor is RegistrationStatus.REGISTERED:
        return EffectiveState(is_registered=True)
    return EffectiveState(is_registered=False)
