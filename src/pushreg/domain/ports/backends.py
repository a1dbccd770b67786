"""Port implemented by each registration backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pushreg.domain.status import RegistrationStatus


@runtime_checkable
class RegistrationBackend(Protocol):
    """Symmetric contract shared by the push-authentication and vendor backends.

    Every argument is passed by keyword; an implementation only uses the ones
    its service needs (the push backend keys its status query on the session,
    the vendor backend on the identity). ``register`` and ``deregister``
    return ``False`` when the call completed but the backend declined it, and
    raise when the call itself failed.
    """

    name: str

    async def query_status(self, *, identity: str, session: str) -> RegistrationStatus: ...

    async def register(self, *, identity: str, session: str, device_token: str) -> bool: ...

    async def deregister(self, *, identity: str) -> bool: ...


__all__ = ["RegistrationBackend"]
