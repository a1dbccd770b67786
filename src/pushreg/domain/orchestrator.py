"""Orchestrates the refresh, enable and disable registration pipelines."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

from pushreg.domain.errors import describe_error
from pushreg.domain.state import ObservableRegistrationState
from pushreg.domain.status import (
    DEREGISTRATION_FAILED_PREFIX,
    DEREGISTRATION_INCOMPLETE_MESSAGE,
    LOAD_FAILED_PREFIX,
    REGISTRATION_FAILED_PREFIX,
    REGISTRATION_INCOMPLETE_MESSAGE,
    merge_statuses,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine
    from types import TracebackType

    from pushreg.domain.ports import CredentialSource, RegistrationBackend, SessionSource
    from pushreg.domain.state import RegistrationSnapshot

    type Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)

DEFAULT_SETTLE_DELAY_SECONDS: Final[float] = 3.0


class RegistrationOrchestrator:
    """Keeps one device's push registration in sync across two backends.

    The orchestrator owns an :class:`ObservableRegistrationState` and mutates
    it from a single asyncio event loop. At most one pipeline runs at a time:
    a command issued while another pipeline is loading is ignored, and an
    ``asyncio.Lock`` serialises the state writes of whichever pipeline won.

    Every freshly issued session is followed by ``settle_delay`` seconds of
    waiting before any backend is contacted with it, because the issuing
    service needs time before the session is usable.
    """

    def __init__(
        self,
        *,
        identity: str,
        session_source: SessionSource,
        credential_source: CredentialSource,
        push_backend: RegistrationBackend,
        vendor_backend: RegistrationBackend,
        settle_delay: float = DEFAULT_SETTLE_DELAY_SECONDS,
        sleep: Sleep = asyncio.sleep,
        state: ObservableRegistrationState | None = None,
    ) -> None:
        if settle_delay < 0:
            raise ValueError("settle_delay must be non-negative")
        self.identity = identity
        self.settle_delay = settle_delay
        self._session_source = session_source
        self._credential_source = credential_source
        self._push = push_backend
        self._vendor = vendor_backend
        self._sleep = sleep
        self._state = state or ObservableRegistrationState()
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    # Observable state

    @property
    def state(self) -> ObservableRegistrationState:
        return self._state

    @property
    def is_registered(self) -> bool:
        return self._state.is_registered

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def info_message(self) -> str | None:
        return self._state.info_message

    @property
    def error_message(self) -> str | None:
        return self._state.error_message

    @property
    def cached_session(self) -> str | None:
        return self._state.cached_session

    def snapshot(self) -> RegistrationSnapshot:
        return self._state.snapshot()

    # Commands

    async def refresh(self) -> None:
        """Reload both backend statuses and publish the merged result.

        A refresh requested while another pipeline is running is coalesced
        into that pipeline and returns immediately.
        """

        if self._busy("refresh"):
            return
        async with self._lock:
            log.info("Refreshing push registration status for %s", self.identity)
            self._state.publish(is_loading=True, info_message=None, error_message=None)
            try:
                session = await self._fresh_session()
                push_status, vendor_status = await _join_pair(
                    self._push.query_status(identity=self.identity, session=session),
                    self._vendor.query_status(identity=self.identity, session=session),
                )
            except Exception as exc:  # noqa: BLE001
                self._report_failure("refresh", LOAD_FAILED_PREFIX, exc)
            else:
                self._state.cached_session = session
                effective = merge_statuses(push_status, vendor_status)
                log.info(
                    "Registration status: push=%s, vendor=%s, registered=%s",
                    push_status,
                    vendor_status,
                    effective.is_registered,
                )
                self._state.publish(
                    is_registered=effective.is_registered,
                    info_message=effective.info_message,
                )
            finally:
                self._state.publish(is_loading=False)

    async def set_desired_state(self, enabled: bool) -> None:  # noqa: FBT001
        """Run the enable or disable pipeline when ``enabled`` differs from the current state."""

        if self._busy("enable" if enabled else "disable"):
            return
        if enabled == self._state.is_registered:
            log.debug("Ignoring request for registered=%s: already in that state", enabled)
            return
        if enabled:
            await self._enable()
        else:
            await self._disable()

    def schedule_refresh(self) -> asyncio.Task[None]:
        """Start :meth:`refresh` as a task owned by the orchestrator."""

        return self._track(self.refresh())

    def schedule_desired_state(self, enabled: bool) -> asyncio.Task[None]:  # noqa: FBT001
        """Start :meth:`set_desired_state` as a task owned by the orchestrator."""

        return self._track(self.set_desired_state(enabled))

    async def wait_idle(self) -> None:
        """Wait for every scheduled task to finish."""

        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Stop accepting scheduled work and let in-flight pipelines complete."""

        self._closed = True
        await self.wait_idle()

    async def __aenter__(self) -> RegistrationOrchestrator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # Pipelines

    async def _enable(self) -> None:
        async with self._lock:
            log.info("Enabling push registration for %s", self.identity)
            self._state.publish(is_loading=True, info_message=None, error_message=None)
            try:
                device_token = await self._credential_source.request_permission_and_token()
                session = await self._fresh_session()
                push_ok, vendor_ok = await _join_pair(
                    self._push.register(
                        identity=self.identity, session=session, device_token=device_token
                    ),
                    self._vendor.register(
                        identity=self.identity, session=session, device_token=device_token
                    ),
                )
            except Exception as exc:  # noqa: BLE001
                self._report_failure("enable", REGISTRATION_FAILED_PREFIX, exc)
            else:
                if push_ok and vendor_ok:
                    log.info("Push registration enabled for %s", self.identity)
                    self._state.cached_session = session
                    self._state.publish(is_registered=True)
                else:
                    log.warning(
                        "Registration rejected: push=%s, vendor=%s", push_ok, vendor_ok
                    )
                    self._state.publish(error_message=REGISTRATION_INCOMPLETE_MESSAGE)
            finally:
                self._state.publish(is_loading=False)

    async def _disable(self) -> None:
        async with self._lock:
            log.info("Disabling push registration for %s", self.identity)
            self._state.publish(is_loading=True, info_message=None, error_message=None)
            try:
                push_ok, vendor_ok = await _join_pair(
                    self._push.deregister(identity=self.identity),
                    self._vendor.deregister(identity=self.identity),
                )
            except Exception as exc:  # noqa: BLE001
                self._report_failure("disable", DEREGISTRATION_FAILED_PREFIX, exc)
            else:
                if push_ok and vendor_ok:
                    log.info("Push registration disabled for %s", self.identity)
                    self._state.publish(is_registered=False)
                else:
                    log.warning(
                        "De-registration rejected: push=%s, vendor=%s", push_ok, vendor_ok
                    )
                    self._state.publish(error_message=DEREGISTRATION_INCOMPLETE_MESSAGE)
            finally:
                self._state.publish(is_loading=False)

    # Helpers

    def _busy(self, pipeline: str) -> bool:
        if self._state.is_loading or self._lock.locked():
            log.debug("Ignoring %s request: another pipeline is running", pipeline)
            return True
        return False

    async def _fresh_session(self) -> str:
        session = await self._session_source.fetch_session()
        await self._sleep(self.settle_delay)
        return session

    def _report_failure(self, pipeline: str, prefix: str, exc: Exception) -> None:
        cause = describe_error(exc)
        log.warning("Push registration %s failed: %s", pipeline, cause)
        self._state.publish(error_message=f"{prefix}{cause}")

    def _track(self, coro: Coroutine[object, object, None]) -> asyncio.Task[None]:
        if self._closed:
            coro.close()
            raise RuntimeError("Orchestrator is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


async def _join_pair[T](first: Awaitable[T], second: Awaitable[T]) -> tuple[T, T]:
    """Await both calls to completion, then raise the first failure if any."""

    results = await asyncio.gather(first, second, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return cast("T", results[0]), cast("T", results[1])
