"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from pushreg.adapters.credentials import ConfiguredCredentialSource
from pushreg.adapters.push_auth import PushAuthBackend
from pushreg.adapters.session import HttpSessionSource
from pushreg.adapters.vendor import VendorBackend
from pushreg.config import (
    get_backend_endpoints,
    get_credential_config,
)
from pushreg.domain.orchestrator import RegistrationOrchestrator

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pushreg.config import BackendEndpoints, CredentialConfig, OrchestratorConfig
    from pushreg.domain.ports import CredentialSource, RegistrationBackend, SessionSource
    from pushreg.domain.state import RegistrationSnapshot, StateChange, StateSubscriber


log = getLogger(__name__)


class Command(StrEnum):
    STATUS = "status"
    ENABLE = "enable"
    DISABLE = "disable"


@dataclass(slots=True)
class RegistrationServices:
    """The four collaborators an orchestrator needs."""

    session_source: SessionSource
    credential_source: CredentialSource
    push_backend: RegistrationBackend
    vendor_backend: RegistrationBackend


def build_http_services(
    *,
    endpoints: BackendEndpoints | None = None,
    credentials: CredentialConfig | None = None,
) -> RegistrationServices:
    """Wire the HTTP adapters from explicit or environment configuration."""

    effective_endpoints = endpoints or get_backend_endpoints()
    effective_credentials = credentials or get_credential_config()
    return RegistrationServices(
        session_source=HttpSessionSource(effective_endpoints.session),
        credential_source=ConfiguredCredentialSource.from_config(effective_credentials),
        push_backend=PushAuthBackend(effective_endpoints.push_auth),
        vendor_backend=VendorBackend(effective_endpoints.vendor),
    )


def build_orchestrator(
    services: RegistrationServices,
    config: OrchestratorConfig,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RegistrationOrchestrator:
    return RegistrationOrchestrator(
        identity=config.device_id,
        session_source=services.session_source,
        credential_source=services.credential_source,
        push_backend=services.push_backend,
        vendor_backend=services.vendor_backend,
        settle_delay=config.settle_delay_seconds,
        sleep=sleep,
    )


def log_state_change(change: StateChange) -> None:
    """State subscriber that narrates every published change."""

    snapshot = change.snapshot
    fields = ", ".join(f"{name}={getattr(snapshot, name)!r}" for name in sorted(change.changed))
    log.info("State changed: %s", fields)


async def run_command(
    orchestrator: RegistrationOrchestrator,
    command: Command,
) -> RegistrationSnapshot:
    """Refresh, then apply ``command`` and return the final snapshot.

    A failed refresh stops the run so the toggle flows never act on a
    registration state that could not be loaded.
    """

    async with orchestrator:
        await orchestrator.refresh()
        if command is Command.STATUS or orchestrator.error_message is not None:
            return orchestrator.snapshot()
        await orchestrator.set_desired_state(command is Command.ENABLE)
        return orchestrator.snapshot()


def execute_command(
    command: Command,
    *,
    services: RegistrationServices,
    config: OrchestratorConfig,
    subscriber: StateSubscriber | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RegistrationSnapshot:
    """Run ``command`` to completion on a fresh event loop."""

    orchestrator = build_orchestrator(services, config, sleep=sleep)
    if subscriber is not None:
        orchestrator.state.subscribe(subscriber)
    log.info(
        "Running %s for device %s (settle delay %.1fs)",
        command,
        config.device_id,
        config.settle_delay_seconds,
    )
    snapshot = asyncio.run(run_command(orchestrator, command))
    log.info(
        f"Finished {command}: registered={snapshot.is_registered}, "
        f"info={snapshot.info_message!r}, error={snapshot.error_message!r}"
    )
    return snapshot
