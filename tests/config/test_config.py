from __future__ import annotations

import logging

import pytest

from pushreg.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_backend_endpoints,
    get_credential_config,
    get_orchestrator_config,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.delenv("MISSING_A", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert exc.value.names == ("MISSING_A", "MISSING_B")


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_orchestrator_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHREG_DEVICE_ID", "device-42")
    monkeypatch.delenv("PUSHREG_SETTLE_DELAY_SECONDS", raising=False)

    config = get_orchestrator_config()

    assert config.device_id == "device-42"
    assert config.settle_delay_seconds == 3.0


def test_orchestrator_config_explicit_device_and_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PUSHREG_DEVICE_ID", raising=False)
    monkeypatch.setenv("PUSHREG_SETTLE_DELAY_SECONDS", "0.25")

    config = get_orchestrator_config(device_id="cli-device")

    assert config.device_id == "cli-device"
    assert config.settle_delay_seconds == 0.25


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_orchestrator_config_rejects_bad_delay(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("PUSHREG_DEVICE_ID", "device-42")
    monkeypatch.setenv("PUSHREG_SETTLE_DELAY_SECONDS", raw)

    with pytest.raises(ConfigurationError):
        get_orchestrator_config()


def test_missing_device_id_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PUSHREG_DEVICE_ID", raising=False)

    with pytest.raises(MissingConfigurationError, match="PUSHREG_DEVICE_ID"):
        get_orchestrator_config()


def test_backend_endpoints_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHREG_SESSION_URL", "https://session.test/")
    monkeypatch.setenv("PUSHREG_PUSH_AUTH_URL", "https://push.test/")
    monkeypatch.setenv("PUSHREG_VENDOR_URL", "https://vendor.test/")

    endpoints = get_backend_endpoints()

    assert endpoints.session.base_url == "https://session.test/"
    assert endpoints.push_auth.base_url == "https://push.test/"
    assert endpoints.vendor.base_url == "https://vendor.test/"
    assert endpoints.vendor.ratelimit is not None


def test_credential_config_treats_blank_token_as_absent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHREG_DEVICE_TOKEN", " ")

    assert get_credential_config().device_token is None


def test_configure_logging_quiets_http_transport_loggers() -> None:
    try:
        configure_logging(level=logging.INFO, force=True)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

        configure_logging(level=logging.DEBUG, force=True)
        assert logging.getLogger("httpx").level == logging.DEBUG
    finally:
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.NOTSET)
