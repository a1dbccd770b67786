"""Port for notification permission and device token acquisition."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialSource(Protocol):
    """Asks for notification permission if needed and returns a device token.

    A refused permission is reported by raising
    :class:`~pushreg.domain.errors.PermissionDeniedError`.
    """

    async def request_permission_and_token(self) -> str: ...


__all__ = ["CredentialSource"]
