"""Adapters connecting the registration ports to concrete services."""

from __future__ import annotations

from .credentials import ConfiguredCredentialSource
from .http_resilience import ResilientClient
from .memory import InMemoryBackend, StaticCredentialSource, StaticSessionSource
from .push_auth import PushAuthAPIError, PushAuthBackend
from .session import HttpSessionSource
from .vendor import VendorAPIError, VendorBackend

__all__ = [
    "ConfiguredCredentialSource",
    "HttpSessionSource",
    "InMemoryBackend",
    "PushAuthAPIError",
    "PushAuthBackend",
    "ResilientClient",
    "StaticCredentialSource",
    "StaticSessionSource",
    "VendorAPIError",
    "VendorBackend",
]
