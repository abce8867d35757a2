"""Typed runtime settings with dotenv support and startup validation."""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


AmountCoercionPolicy = Literal["reject", "propagate_nan"]


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for webhook API runtime and normalization behavior.

    Environment variable names map directly to field names in uppercase.
    Example: `api_prefix` reads from `API_PREFIX`. Dict and list fields are
    read from JSON-encoded environment values.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        api_prefix: Path prefix for webhook routes.
        log_level: Root log level name.
        rate_limit_requests: Accepted webhook requests per merchant and window.
        rate_limit_window_seconds: Fixed rate-limit window length.
        amount_coercion_policy: Handling of non-numeric chargeback amounts.
        merchant_api_keys: Merchant identifier to API key table.
        inactive_merchant_ids: Merchants whose keys are rejected.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=3000, ge=1, le=65535)
    api_prefix: str = Field(default="api")
    log_level: str = Field(default="INFO")
    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: int = Field(default=60, ge=1)
    amount_coercion_policy: AmountCoercionPolicy = Field(default="reject")
    merchant_api_keys: dict[str, str] = Field(
        default_factory=lambda: {
            "merchant_123": "sk_test_merchant123_secret_key_abc",
            "merchant_456": "sk_test_merchant456_secret_key_xyz",
            "merchant_789": "sk_test_merchant789_secret_key_def",
        }
    )
    inactive_merchant_ids: list[str] = Field(default_factory=lambda: ["merchant_789"])

    @field_validator("api_prefix")
    @classmethod
    def _validate_api_prefix(cls, value: str) -> str:
        stripped_value = value.strip().strip("/")
        if not stripped_value:
            raise ValueError("api_prefix must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @field_validator("merchant_api_keys")
    @classmethod
    def _validate_merchant_api_keys(cls, value: dict[str, str]) -> dict[str, str]:
        normalized_keys: dict[str, str] = {}
        for merchant_id, api_key in value.items():
            stripped_merchant_id = merchant_id.strip()
            stripped_api_key = api_key.strip()
            if not stripped_merchant_id or not stripped_api_key:
                raise ValueError("merchant_api_keys entries must not be blank")
            normalized_keys[stripped_merchant_id] = stripped_api_key
        if len(set(normalized_keys.values())) != len(normalized_keys):
            raise ValueError("merchant_api_keys must not share one api key between merchants")
        return normalized_keys


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
