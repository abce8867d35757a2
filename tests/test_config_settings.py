"""Tests for runtime settings validation and loading."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from app.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings
from app.config.logging_setup import LOG_FORMAT


def test_config_settings_defaults_are_valid() -> None:
    settings = AppSettings()

    assert settings.api_prefix == "api"
    assert settings.application_port == 3000
    assert settings.amount_coercion_policy == "reject"
    assert "merchant_123" in settings.merchant_api_keys


def test_config_settings_normalize_prefix_and_log_level() -> None:
    settings = AppSettings(api_prefix="/v1/", log_level="debug")

    assert settings.api_prefix == "v1"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_prefix": "/"},
        {"log_level": "verbose"},
        {"amount_coercion_policy": "ignore"},
        {"rate_limit_requests": 0},
        {"merchant_api_keys": {"merchant_a": " "}},
        {"merchant_api_keys": {"merchant_a": "shared", "merchant_b": "shared"}},
    ],
)
def test_config_settings_reject_invalid_values(overrides: dict[str, object]) -> None:
    """Fail validation for malformed configuration values.

    Args:
        overrides: Invalid field values.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    with pytest.raises(ValidationError):
        AppSettings(**overrides)


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_PREFIX", "hooks")
    monkeypatch.setenv("AMOUNT_COERCION_POLICY", "propagate_nan")

    settings = config_load_settings()

    assert settings.api_prefix == "hooks"
    assert settings.amount_coercion_policy == "propagate_nan"


def test_config_load_settings_wraps_validation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Surface invalid environment as a startup configuration error.

    Args:
        monkeypatch: Pytest environment patch fixture.

    Returns:
        None: Assertions validate wrapped failure.

    Raises:
        AssertionError: Raised when the failure is not wrapped.
    """

    monkeypatch.setenv("RATE_LIMIT_REQUESTS", "0")

    with pytest.raises(SettingsLoadError) as error_info:
        config_load_settings()

    assert "Startup configuration validation failed" in str(error_info.value)


def test_config_configure_logging_applies_level() -> None:
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    try:
        config_configure_logging(AppSettings(log_level="warning"))

        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert root_logger.handlers[0].formatter._fmt == LOG_FORMAT  # pylint: disable=protected-access
    finally:
        root_logger.handlers[:] = original_handlers
        root_logger.setLevel(original_level)
