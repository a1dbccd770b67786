from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import httpx
import pytest

from pushreg.adapters.push_auth import SESSION_HEADER, PushAuthAPIError, PushAuthBackend
from pushreg.adapters.push_auth.schema import StatusResponse
from pushreg.domain.errors import BackendError
from pushreg.domain.ports import RegistrationBackend
from pushreg.domain.status import RegistrationStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from pushreg.adapters.http_resilience import ResilienceConfig, ResilientClient

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]
    Handler = Callable[[httpx.Request], httpx.Response]


def test_query_status_sends_session_header(
    push_auth_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "registered"})

    backend = PushAuthBackend(push_auth_resilience, client_factory=make_client_factory(handler))

    status = asyncio.run(backend.query_status(identity="device-1", session="session-abc"))

    assert status is RegistrationStatus.REGISTERED
    [request] = seen
    assert request.method == "GET"
    assert request.url.path == "/api/registration/status"
    assert request.headers[SESSION_HEADER] == "session-abc"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("registered_elsewhere", RegistrationStatus.REGISTERED_ELSEWHERE),
        ("another_device", RegistrationStatus.REGISTERED_ELSEWHERE),
        ("anotherDevice", RegistrationStatus.REGISTERED_ELSEWHERE),
        ("Unregistered", RegistrationStatus.UNREGISTERED),
        ("register", RegistrationStatus.REGISTERED),
    ],
)
def test_status_response_normalizes_values(raw: str, expected: RegistrationStatus) -> None:
    assert StatusResponse.model_validate({"status": raw}).status is expected


def test_register_posts_device_session_and_token(
    push_auth_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    backend = PushAuthBackend(push_auth_resilience, client_factory=make_client_factory(handler))

    result = asyncio.run(
        backend.register(identity="device-1", session="session-abc", device_token="tok")
    )

    assert result is True
    [request] = seen
    assert request.method == "POST"
    assert request.url.path == "/api/registration"
    assert json.loads(request.content) == {
        "device_id": "device-1",
        "session": "session-abc",
        "push_token": "tok",
    }


def test_deregister_reports_declined_change(
    push_auth_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": False})

    backend = PushAuthBackend(push_auth_resilience, client_factory=make_client_factory(handler))

    result = asyncio.run(backend.deregister(identity="device/1"))

    assert result is False
    assert seen[0].method == "DELETE"
    assert seen[0].url.raw_path.decode() == "/api/registration/device%2F1"


def test_error_payload_raises_api_error(
    push_auth_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": 29, "message": "Session expired"})

    backend = PushAuthBackend(push_auth_resilience, client_factory=make_client_factory(handler))

    with pytest.raises(PushAuthAPIError) as excinfo:
        asyncio.run(backend.query_status(identity="device-1", session="stale"))

    assert isinstance(excinfo.value, BackendError)
    assert excinfo.value.code == 29
    assert excinfo.value.backend == "push_auth"
    assert str(excinfo.value) == "Session expired"


def test_http_error_status_propagates(
    push_auth_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"detail": "forbidden"})

    backend = PushAuthBackend(push_auth_resilience, client_factory=make_client_factory(handler))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(backend.register(identity="device-1", session="s", device_token="t"))


def test_backend_satisfies_port(push_auth_resilience: ResilienceConfig) -> None:
    assert isinstance(PushAuthBackend(push_auth_resilience), RegistrationBackend)
