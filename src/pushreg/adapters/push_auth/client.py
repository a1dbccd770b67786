"""HTTP client for the push-authentication registration backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from pydantic import BaseModel

from pushreg.adapters.http_resilience import ResilienceConfig, default_client_factory
from pushreg.domain.errors import BackendError
from pushreg.domain.ports import RegistrationBackend

from .schema import ErrorResponse, OperationResponse, RegisterRequest, StatusResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from pushreg.adapters.http_resilience import ResilientClient
    from pushreg.domain.status import RegistrationStatus

log = getLogger(__name__)

SESSION_HEADER: Final[str] = "X-Session-Token"


class PushAuthAPIError(BackendError):
    """Raised when the push-authentication API returns an application-level error."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message, backend="push_auth", code=code)


def _decode[M: BaseModel](response: httpx.Response, model: type[M]) -> M:
    response.raise_for_status()
    payload = response.json()
    if isinstance(payload, dict) and "error" in payload:
        error_payload = ErrorResponse.model_validate(payload)
        log.error(f"Push-auth API error {error_payload.error}: {error_payload.message}")
        raise PushAuthAPIError(
            error_payload.message or f"error {error_payload.error}", code=error_payload.error
        ) from None
    if not isinstance(payload, dict):
        raise PushAuthAPIError("Unexpected push-auth response payload")
    return model.model_validate(payload)


@dataclass(slots=True)
class PushAuthBackend:
    """Registration backend keyed on the session for status and the device for changes."""

    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    name: str = "push_auth"

    async def query_status(self, *, identity: str, session: str) -> RegistrationStatus:  # noqa: ARG002
        async with self.client_factory(self.resilience) as client:
            response = await client.get(
                "registration/status", headers={SESSION_HEADER: session}
            )
        return _decode(response, StatusResponse).status

    async def register(self, *, identity: str, session: str, device_token: str) -> bool:
        body = RegisterRequest(device_id=identity, session=session, push_token=device_token)
        async with self.client_factory(self.resilience) as client:
            response = await client.post("registration", json=body.model_dump())
        return _decode(response, OperationResponse).success

    async def deregister(self, *, identity: str) -> bool:
        async with self.client_factory(self.resilience) as client:
            response = await client.delete(f"registration/{quote(identity, safe='')}")
        return _decode(response, OperationResponse).success


if TYPE_CHECKING:
    _backend_check: RegistrationBackend = PushAuthBackend(ResilienceConfig(name="push_auth"))
