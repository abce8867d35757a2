"""Health endpoint router composition for app and provider registry checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.webhooks import WebhookProcessorPort


def api_create_health_router(webhook_processor: WebhookProcessorPort) -> APIRouter:
    """Create health-check router with app and provider registry status.

    Args:
        webhook_processor: Normalization pipeline exposing registered providers.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when webhook_processor is invalid.
    """

    if webhook_processor is None:
        raise ValueError("webhook_processor must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health and registered providers.

        Returns:
            JSONResponse: `ok` when at least one provider is registered, else `degraded` with 503.
        """

        providers = webhook_processor.webhook_supported_providers()
        if not providers:
            payload = {
                "status": "degraded",
                "app": "up",
                "providers": [],
                "detail": "no provider mappers registered",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "status": "ok",
            "app": "up",
            "providers": providers,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
