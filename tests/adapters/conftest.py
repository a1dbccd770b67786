"""Shared fixtures for HTTP adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from pushreg.adapters.http_resilience import ResilienceConfig, ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]
    Handler = Callable[[httpx.Request], httpx.Response]


def _make_client_factory(handler: Handler) -> ClientFactory:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


@pytest.fixture
def make_client_factory() -> Callable[[Handler], ClientFactory]:
    return _make_client_factory


@pytest.fixture
def push_auth_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="push_auth", base_url="https://push.example.test/api/")


@pytest.fixture
def vendor_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="vendor", base_url="https://vendor.example.test/v1/")


@pytest.fixture
def session_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="session", base_url="https://session.example.test/")
