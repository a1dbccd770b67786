"""In-memory implementations of every registration port.

They back the CLI demo mode and the test-suite. Delays default to zero; the
``demo_*`` helpers use the latencies of a typical mobile deployment.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from pushreg.domain.errors import PermissionDeniedError
from pushreg.domain.ports import CredentialSource, RegistrationBackend, SessionSource
from pushreg.domain.status import RegistrationStatus

DEMO_SESSION: Final[str] = "mock-session-1234"
DEMO_DEVICE_TOKEN: Final[str] = "mock-push-token-xyz"
DEMO_SESSION_DELAY: Final[float] = 1.0
DEMO_PERMISSION_DELAY: Final[float] = 0.5
DEMO_BACKEND_DELAY: Final[float] = 1.0


@dataclass(slots=True)
class StaticSessionSource:
    session: str = DEMO_SESSION
    delay: float = 0.0
    failure: Exception | None = None
    calls: int = 0

    async def fetch_session(self) -> str:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.failure is not None:
            raise self.failure
        return self.session


@dataclass(slots=True)
class StaticCredentialSource:
    token: str = DEMO_DEVICE_TOKEN
    allow: bool = True
    delay: float = 0.0
    calls: int = 0

    async def request_permission_and_token(self) -> str:
        self.calls += 1
        if not self.allow:
            raise PermissionDeniedError("Notification permission denied")
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.token


@dataclass(slots=True)
class BackendCall:
    operation: str
    identity: str
    session: str | None = None
    device_token: str | None = None


@dataclass(slots=True)
class InMemoryBackend:
    """Backend double that records calls and keeps its own status.

    ``succeed=False`` makes register/deregister report a declined change;
    ``failure`` makes every call raise. A successful change updates
    ``status`` so a later refresh observes it.
    """

    name: str = "memory"
    status: RegistrationStatus = RegistrationStatus.UNREGISTERED
    succeed: bool = True
    delay: float = 0.0
    failure: Exception | None = None
    calls: list[BackendCall] = field(default_factory=list[BackendCall])

    def calls_for(self, operation: str) -> list[BackendCall]:
        return [call for call in self.calls if call.operation == operation]

    async def query_status(self, *, identity: str, session: str) -> RegistrationStatus:
        await self._record(BackendCall("query_status", identity, session=session))
        return self.status

    async def register(self, *, identity: str, session: str, device_token: str) -> bool:
        await self._record(
            BackendCall("register", identity, session=session, device_token=device_token)
        )
        if self.succeed:
            self.status = RegistrationStatus.REGISTERED
        return self.succeed

    async def deregister(self, *, identity: str) -> bool:
        await self._record(BackendCall("deregister", identity))
        if self.succeed:
            self.status = RegistrationStatus.UNREGISTERED
        return self.succeed

    async def _record(self, call: BackendCall) -> None:
        self.calls.append(call)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.failure is not None:
            raise self.failure


def demo_session_source() -> StaticSessionSource:
    return StaticSessionSource(delay=DEMO_SESSION_DELAY)


def demo_credential_source(*, allow: bool = True) -> StaticCredentialSource:
    return StaticCredentialSource(allow=allow, delay=DEMO_PERMISSION_DELAY)


def demo_backend(
    name: str,
    *,
    status: RegistrationStatus = RegistrationStatus.UNREGISTERED,
    succeed: bool = True,
) -> InMemoryBackend:
    return InMemoryBackend(name=name, status=status, succeed=succeed, delay=DEMO_BACKEND_DELAY)


if TYPE_CHECKING:
    _session_check: SessionSource = StaticSessionSource()
    _credential_check: CredentialSource = StaticCredentialSource()
    _backend_check: RegistrationBackend = InMemoryBackend()
