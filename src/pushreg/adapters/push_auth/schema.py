"""Pydantic models describing the push-authentication API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pushreg.domain.status import RegistrationStatus

_STATUS_ALIASES: dict[str, RegistrationStatus] = {
    "another_device": RegistrationStatus.REGISTERED_ELSEWHERE,
    "anotherdevice": RegistrationStatus.REGISTERED_ELSEWHERE,
    "register": RegistrationStatus.REGISTERED,
    "unregister": RegistrationStatus.UNREGISTERED,
}


class PushAuthBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StatusResponse(PushAuthBaseModel):
    status: RegistrationStatus

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            return _STATUS_ALIASES.get(normalized, normalized)
        return value


class RegisterRequest(PushAuthBaseModel):
    device_id: str
    session: str
    push_token: str


class OperationResponse(PushAuthBaseModel):
    success: bool


class ErrorResponse(PushAuthBaseModel):
    error: int
    message: str = Field(default="")
