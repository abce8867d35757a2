"""API router package for endpoint composition."""

from .health import api_create_health_router
from .webhook import WebhookRequestBody, api_create_webhook_router, api_json_safe

__all__ = ["WebhookRequestBody", "api_create_health_router", "api_create_webhook_router", "api_json_safe"]
