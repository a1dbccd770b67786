"""HTTP session source."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError

from pushreg.adapters.http_resilience import ResilienceConfig, default_client_factory
from pushreg.domain.errors import SessionUnavailableError
from pushreg.domain.ports import SessionSource

if TYPE_CHECKING:
    from collections.abc import Callable

    from pushreg.adapters.http_resilience import ResilientClient

log = getLogger(__name__)


class SessionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session: str


@dataclass(slots=True)
class HttpSessionSource:
    """Issues sessions by posting to ``{base_url}/session``."""

    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def fetch_session(self) -> str:
        async with self.client_factory(self.resilience) as client:
            response = await client.post("session")
        response.raise_for_status()
        try:
            payload = SessionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SessionUnavailableError("Unexpected session response payload") from exc
        if not payload.session.strip():
            raise SessionUnavailableError("Session service returned an empty session")
        log.debug("Obtained session from %s", response.request.url)
        return payload.session


if TYPE_CHECKING:
    _source_check: SessionSource = HttpSessionSource(ResilienceConfig(name="session"))

__all__ = ["HttpSessionSource", "SessionResponse"]
