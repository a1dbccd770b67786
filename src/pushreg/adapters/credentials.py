"""Credential source backed by configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pushreg.domain.errors import PermissionDeniedError
from pushreg.domain.ports import CredentialSource

if TYPE_CHECKING:
    from pushreg.config import CredentialConfig


@dataclass(slots=True, frozen=True)
class ConfiguredCredentialSource:
    """Returns the device token provisioned for this host.

    Hosts without an interactive permission prompt express consent by
    configuring a token; its absence is treated as a denied permission.
    """

    device_token: str | None

    @classmethod
    def from_config(cls, config: CredentialConfig) -> ConfiguredCredentialSource:
        return cls(device_token=config.device_token)

    async def request_permission_and_token(self) -> str:
        if not self.device_token:
            raise PermissionDeniedError("Notification permission denied: no device token")
        return self.device_token


if TYPE_CHECKING:
    _source_check: CredentialSource = ConfiguredCredentialSource(device_token=None)
