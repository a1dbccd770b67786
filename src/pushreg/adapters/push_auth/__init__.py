"""Public interface for the push-authentication adapter."""

from __future__ import annotations

from .client import SESSION_HEADER, PushAuthAPIError, PushAuthBackend
from .schema import OperationResponse, RegisterRequest, StatusResponse

__all__ = [
    "SESSION_HEADER",
    "OperationResponse",
    "PushAuthAPIError",
    "PushAuthBackend",
    "RegisterRequest",
    "StatusResponse",
]
