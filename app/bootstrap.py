"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from app.api import create_api_application
from app.config import AppSettings, config_configure_logging, config_load_settings
from app.mapping import JsonataMappingEngine, MapperRegistry, WebhookMapperPort, mapping_build_registry
from app.providers import StripeWebhookMapper
from app.security import security_build_merchant_directory, security_build_rate_limiter
from app.webhooks import WebhookOrchestrator


def bootstrap_create_mappers(settings: AppSettings) -> list[WebhookMapperPort]:
    """Instantiate every provider mapper shipped with the service.

    Args:
        settings: Validated runtime settings.

    Returns:
        list[WebhookMapperPort]: Mappers in registration order.
    """

    return [
        StripeWebhookMapper(amount_coercion_policy=settings.amount_coercion_policy),
    ]


def bootstrap_create_registry(settings: AppSettings) -> MapperRegistry:
    """Build the frozen provider registry.

    Args:
        settings: Validated runtime settings.

    Returns:
        MapperRegistry: Read-only registry of shipped mappers.
    """

    return mapping_build_registry(bootstrap_create_mappers(settings))


def bootstrap_create_orchestrator(settings: AppSettings | None = None) -> WebhookOrchestrator:
    """Build the webhook pipeline for HTTP and non-HTTP trigger surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        WebhookOrchestrator: Fully wired orchestrator instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return WebhookOrchestrator(
        registry=bootstrap_create_registry(resolved_settings),
        mapping_engine=JsonataMappingEngine(),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(resolved_settings)
    return create_api_application(
        settings=resolved_settings,
        webhook_processor=bootstrap_create_orchestrator(resolved_settings),
        merchant_directory=security_build_merchant_directory(resolved_settings),
        rate_limiter=security_build_rate_limiter(resolved_settings),
    )
