"""Translation of pipeline and guard failures into HTTP error responses."""

from __future__ import annotations

import logging
from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain import ErrorDetail, WebhookError, WebhookErrorName, WebhookErrorType
from app.security import MerchantAuthenticationError, RateLimitExceededError
from app.webhooks import WebhookProcessorPort

logger = logging.getLogger(__name__)

AUTHENTICATION_ERROR_TYPE: Final[str] = "AuthenticationError"
RATE_LIMIT_ERROR_TYPE: Final[str] = "RateLimitError"

API_WEBHOOK_ERROR_RESPONSES: Final[dict[WebhookErrorName, tuple[int, WebhookErrorType]]] = {
    WebhookErrorName.PROVIDER_NOT_FOUND: (status.HTTP_400_BAD_REQUEST, WebhookErrorType.PROVIDER_ERROR),
    WebhookErrorName.EVENT_TYPE_NOT_FOUND: (status.HTTP_400_BAD_REQUEST, WebhookErrorType.VALIDATION_ERROR),
    WebhookErrorName.MAPPING_EXPRESSION_NOT_FOUND: (status.HTTP_400_BAD_REQUEST, WebhookErrorType.VALIDATION_ERROR),
    WebhookErrorName.PAYLOAD_VALIDATION: (status.HTTP_400_BAD_REQUEST, WebhookErrorType.VALIDATION_ERROR),
    WebhookErrorName.MAPPING_EXECUTION: (status.HTTP_500_INTERNAL_SERVER_ERROR, WebhookErrorType.MAPPING_ERROR),
    WebhookErrorName.UNCLASSIFIED: (status.HTTP_500_INTERNAL_SERVER_ERROR, WebhookErrorType.INTERNAL_ERROR),
}


def api_build_error_payload(
    error_type: str,
    message: str,
    details: list[ErrorDetail] | tuple[ErrorDetail, ...] | None = None,
) -> dict[str, object]:
    """Build the shared error body shape.

    Args:
        error_type: Error category label.
        message: Human-readable error message.
        details: Optional detail entries; omitted from the body when empty.

    Returns:
        dict[str, object]: JSON-serializable error body.
    """

    payload: dict[str, object] = {"error": error_type, "message": message}
    if details:
        payload["details"] = [detail.to_payload() for detail in details]
    return payload


def api_build_webhook_error_response(error: WebhookError, supported_providers: list[str]) -> JSONResponse:
    """Translate one taxonomy failure into its HTTP response.

    Args:
        error: Taxonomy failure raised by the pipeline.
        supported_providers: Registered providers listed for provider failures.

    Returns:
        JSONResponse: Error response with status from the taxonomy table.
    """

    status_code, error_type = API_WEBHOOK_ERROR_RESPONSES.get(
        error.error_name,
        (status.HTTP_500_INTERNAL_SERVER_ERROR, WebhookErrorType.INTERNAL_ERROR),
    )
    details: tuple[ErrorDetail, ...] = error.details
    if error.error_name == WebhookErrorName.PROVIDER_NOT_FOUND:
        details = (ErrorDetail(issue=f"Supported providers: {', '.join(supported_providers)}"),)

    return JSONResponse(
        content=api_build_error_payload(error_type.value, error.message or "An unexpected error occurred", details),
        status_code=status_code,
    )


def api_register_exception_handlers(application: FastAPI, webhook_processor: WebhookProcessorPort) -> None:
    """Install taxonomy, guard and request-validation handlers on the application.

    Args:
        application: FastAPI application.
        webhook_processor: Processor used to list supported providers.

    Returns:
        None: Handlers are registered as side effect.
    """

    @application.exception_handler(WebhookError)
    async def api_handle_webhook_error(_request: Request, error: WebhookError) -> JSONResponse:
        return api_build_webhook_error_response(error, webhook_processor.webhook_supported_providers())

    @application.exception_handler(MerchantAuthenticationError)
    async def api_handle_authentication_error(_request: Request, error: MerchantAuthenticationError) -> JSONResponse:
        return JSONResponse(
            content=api_build_error_payload(AUTHENTICATION_ERROR_TYPE, error.message),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    @application.exception_handler(RateLimitExceededError)
    async def api_handle_rate_limit_error(_request: Request, error: RateLimitExceededError) -> JSONResponse:
        logger.warning("rate limit exceeded merchant=%s", error.merchant_id)
        return JSONResponse(
            content=api_build_error_payload(RATE_LIMIT_ERROR_TYPE, error.message),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(error.retry_after_seconds)},
        )

    @application.exception_handler(RequestValidationError)
    async def api_handle_request_validation_error(_request: Request, error: RequestValidationError) -> JSONResponse:
        details = [
            ErrorDetail(
                issue=str(validation_error.get("msg", "Invalid value")),
                field=".".join(str(part) for part in validation_error.get("loc", ())) or None,
            )
            for validation_error in error.errors()
        ]
        return JSONResponse(
            content=api_build_error_payload(
                WebhookErrorType.VALIDATION_ERROR.value,
                "Request validation failed",
                details,
            ),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
