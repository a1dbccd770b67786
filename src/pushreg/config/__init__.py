"""Application configuration helpers."""

from __future__ import annotations

from .env import float_env_var, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryablePayloadError, RetryPolicy
from .logging import configure_logging
from .registration import (
    BackendEndpoints,
    CredentialConfig,
    OrchestratorConfig,
    get_backend_endpoints,
    get_credential_config,
    get_orchestrator_config,
)

__all__ = [
    "BackendEndpoints",
    "ConfigurationError",
    "CredentialConfig",
    "MissingConfigurationError",
    "OrchestratorConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RetryablePayloadError",
    "configure_logging",
    "float_env_var",
    "get_backend_endpoints",
    "get_credential_config",
    "get_orchestrator_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
