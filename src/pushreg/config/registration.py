"""Registration orchestrator and backend endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from pushreg.domain.orchestrator import DEFAULT_SETTLE_DELAY_SECONDS

from .env import float_env_var, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEVICE_ID_VAR: Final[str] = "PUSHREG_DEVICE_ID"
SETTLE_DELAY_VAR: Final[str] = "PUSHREG_SETTLE_DELAY_SECONDS"
DEVICE_TOKEN_VAR: Final[str] = "PUSHREG_DEVICE_TOKEN"
SESSION_URL_VAR: Final[str] = "PUSHREG_SESSION_URL"
PUSH_AUTH_URL_VAR: Final[str] = "PUSHREG_PUSH_AUTH_URL"
VENDOR_URL_VAR: Final[str] = "PUSHREG_VENDOR_URL"

BACKEND_TIMEOUT_SECONDS: Final[float] = 10.0


@dataclass(frozen=True, slots=True)
class OrchestratorConfig:
    """Identity and timing for one registration orchestrator."""

    device_id: str
    settle_delay_seconds: float = DEFAULT_SETTLE_DELAY_SECONDS


@dataclass(frozen=True, slots=True)
class CredentialConfig:
    device_token: str | None = None


@dataclass(frozen=True, slots=True)
class BackendEndpoints:
    """HTTP client settings for the session service and both registration backends."""

    session: ResilienceConfig
    push_auth: ResilienceConfig
    vendor: ResilienceConfig


def get_orchestrator_config(*, device_id: str | None = None) -> OrchestratorConfig:
    resolved_id = device_id or require_env_var(DEVICE_ID_VAR)
    delay = float_env_var(SETTLE_DELAY_VAR, DEFAULT_SETTLE_DELAY_SECONDS)
    if delay < 0:
        raise ConfigurationError(f"{SETTLE_DELAY_VAR} must be non-negative")
    return OrchestratorConfig(device_id=resolved_id, settle_delay_seconds=delay)


def get_credential_config() -> CredentialConfig:
    return CredentialConfig(device_token=optional_env_var(DEVICE_TOKEN_VAR))


def get_backend_endpoints() -> BackendEndpoints:
    values = require_env_vars((SESSION_URL_VAR, PUSH_AUTH_URL_VAR, VENDOR_URL_VAR))
    return BackendEndpoints(
        session=ResilienceConfig(
            name="session",
            base_url=values[SESSION_URL_VAR],
            timeout_seconds=BACKEND_TIMEOUT_SECONDS,
        ),
        push_auth=ResilienceConfig(
            name="push_auth",
            base_url=values[PUSH_AUTH_URL_VAR],
            timeout_seconds=BACKEND_TIMEOUT_SECONDS,
        ),
        vendor=ResilienceConfig(
            name="vendor",
            base_url=values[VENDOR_URL_VAR],
            timeout_seconds=BACKEND_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        ),
    )
