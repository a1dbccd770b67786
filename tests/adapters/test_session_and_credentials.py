from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from pushreg.adapters.credentials import ConfiguredCredentialSource
from pushreg.adapters.session import HttpSessionSource
from pushreg.config import CredentialConfig
from pushreg.domain.errors import PermissionDeniedError, SessionUnavailableError
from pushreg.domain.ports import CredentialSource, SessionSource

if TYPE_CHECKING:
    from collections.abc import Callable

    from pushreg.adapters.http_resilience import ResilienceConfig, ResilientClient

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]
    Handler = Callable[[httpx.Request], httpx.Response]


def test_fetch_session_posts_and_returns_token(
    session_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"session": "session-xyz", "expires_in": 600})

    source = HttpSessionSource(session_resilience, client_factory=make_client_factory(handler))

    assert asyncio.run(source.fetch_session()) == "session-xyz"
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/session"
    assert isinstance(source, SessionSource)


@pytest.mark.parametrize("payload", [{"session": "  "}, {"token": "wrong-key"}])
def test_fetch_session_rejects_unusable_payloads(
    session_resilience: ResilienceConfig,
    make_client_factory: Callable[[Handler], ClientFactory],
    payload: dict[str, str],
) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    source = HttpSessionSource(session_resilience, client_factory=make_client_factory(handler))

    with pytest.raises(SessionUnavailableError):
        asyncio.run(source.fetch_session())


def test_configured_credentials_return_token() -> None:
    source = ConfiguredCredentialSource.from_config(CredentialConfig(device_token="apns-token"))

    assert asyncio.run(source.request_permission_and_token()) == "apns-token"
    assert isinstance(source, CredentialSource)


def test_missing_token_is_a_denied_permission() -> None:
    source = ConfiguredCredentialSource.from_config(CredentialConfig())

    with pytest.raises(PermissionDeniedError):
        asyncio.run(source.request_permission_and_token())
