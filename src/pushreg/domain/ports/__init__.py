"""Domain port definitions for adapters."""

from __future__ import annotations

from .backends import RegistrationBackend
from .credentials import CredentialSource
from .sessions import SessionSource

__all__ = [
    "CredentialSource",
    "RegistrationBackend",
    "SessionSource",
]
