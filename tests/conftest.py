from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from pushreg.adapters.memory import InMemoryBackend, StaticCredentialSource, StaticSessionSource
from pushreg.domain.orchestrator import RegistrationOrchestrator

if TYPE_CHECKING:
    from collections.abc import Callable

    from pushreg.domain.ports import CredentialSource, RegistrationBackend, SessionSource

DEVICE_ID = "device-1"


@dataclass(slots=True)
class VirtualClock:
    """Stands in for ``asyncio.sleep`` and advances time without waiting."""

    now: float = 0.0
    sleeps: list[float] = field(default_factory=list[float])

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def push_backend() -> InMemoryBackend:
    return InMemoryBackend(name="push_auth")


@pytest.fixture
def vendor_backend() -> InMemoryBackend:
    return InMemoryBackend(name="vendor")


@pytest.fixture
def session_source() -> StaticSessionSource:
    return StaticSessionSource(session="session-abc")


@pytest.fixture
def credential_source() -> StaticCredentialSource:
    return StaticCredentialSource(token="device-token")


@pytest.fixture
def make_orchestrator(
    clock: VirtualClock,
    push_backend: InMemoryBackend,
    vendor_backend: InMemoryBackend,
    session_source: StaticSessionSource,
    credential_source: StaticCredentialSource,
) -> Callable[..., RegistrationOrchestrator]:
    def factory(
        *,
        push: RegistrationBackend | None = None,
        vendor: RegistrationBackend | None = None,
        sessions: SessionSource | None = None,
        credentials: CredentialSource | None = None,
        settle_delay: float = 3.0,
    ) -> RegistrationOrchestrator:
        return RegistrationOrchestrator(
            identity=DEVICE_ID,
            session_source=sessions or session_source,
            credential_source=credentials or credential_source,
            push_backend=push or push_backend,
            vendor_backend=vendor or vendor_backend,
            settle_delay=settle_delay,
            sleep=clock.sleep,
        )

    return factory
