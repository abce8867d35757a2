"""FastAPI application factory for the webhook normalization service.

This module defines API application composition used by the runtime.
"""

from fastapi import FastAPI

from app.config import AppSettings
from app.security import MerchantDirectoryPort, MerchantRateLimiter
from app.webhooks import WebhookProcessorPort

from .errors import api_register_exception_handlers
from .routers import api_create_health_router, api_create_webhook_router


def create_api_application(
    settings: AppSettings,
    webhook_processor: WebhookProcessorPort,
    merchant_directory: MerchantDirectoryPort,
    rate_limiter: MerchantRateLimiter,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for routing and metadata.
        webhook_processor: Normalization pipeline behind the webhook endpoint.
        merchant_directory: Merchant credential directory used by the auth guard.
        rate_limiter: Per-merchant admission control.

    Returns:
        FastAPI: Framework application instance with routes and error handlers.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(
        title="Chargeback Webhook Mapper",
        description="Transforms payment provider webhooks into a normalized chargeback record.",
        docs_url=f"/{settings.api_prefix}/docs",
        openapi_url=f"/{settings.api_prefix}/openapi.json",
    )

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Service identity and environment.
        """

        return {
            "service": "chargeback-webhook-mapper",
            "status": "ready",
            "environment": settings.environment_name,
        }

    api_register_exception_handlers(application, webhook_processor)
    application.include_router(api_create_health_router(webhook_processor=webhook_processor))
    application.include_router(
        api_create_webhook_router(
            settings=settings,
            webhook_processor=webhook_processor,
            merchant_directory=merchant_directory,
            rate_limiter=rate_limiter,
        )
    )

    return application
