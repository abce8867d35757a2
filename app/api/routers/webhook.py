"""Webhook API router composition for provider payload normalization."""

from __future__ import annotations

import logging
import math
import time
from typing import Any

from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import AppSettings
from app.domain import ErrorDetail, WebhookError, WebhookErrorType
from app.security import (
    MerchantDirectoryPort,
    MerchantRateLimiter,
    security_authenticate_merchant,
)
from app.webhooks import WebhookProcessorPort

from ..errors import api_build_error_payload

logger = logging.getLogger(__name__)

WEBHOOK_PROCESSED_HEADER = "X-Webhook-Processed"


class WebhookRequestBody(BaseModel):
    """Inbound webhook request body.

    Attributes:
        payload: Raw provider webhook payload object.
    """

    payload: dict[str, Any]


def api_create_webhook_router(
    settings: AppSettings,
    webhook_processor: WebhookProcessorPort,
    merchant_directory: MerchantDirectoryPort,
    rate_limiter: MerchantRateLimiter,
) -> APIRouter:
    """Create webhook router with merchant guards and normalization endpoint.

    Args:
        settings: Runtime settings carrying the API prefix.
        webhook_processor: Normalization pipeline.
        merchant_directory: Merchant credential directory for the auth guard.
        rate_limiter: Per-merchant admission control.

    Returns:
        APIRouter: Router exposing `POST /{api_prefix}/webhook`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if webhook_processor is None:
        raise ValueError("webhook_processor must not be None")
    if merchant_directory is None:
        raise ValueError("merchant_directory must not be None")
    if rate_limiter is None:
        raise ValueError("rate_limiter must not be None")

    router = APIRouter(prefix=f"/{settings.api_prefix}", tags=["webhooks"])

    def api_require_admitted_merchant(
        authorization: str | None = Header(default=None),
        x_forter_api_key: str | None = Header(default=None),
        x_merchant_id: str | None = Header(default=None),
    ) -> str:
        """Authenticate the caller and charge one request to its rate budget.

        Returns:
            str: Authenticated merchant identifier.

        Raises:
            MerchantAuthenticationError: Raised when credentials are rejected.
            RateLimitExceededError: Raised when the merchant budget is exhausted.
        """

        merchant_id = security_authenticate_merchant(
            directory=merchant_directory,
            authorization=authorization,
            api_key_header=x_forter_api_key,
            merchant_id_header=x_merchant_id,
        )
        rate_limiter.security_admit(merchant_id)
        return merchant_id

    @router.post("/webhook")
    def api_webhook_process(
        request_body: WebhookRequestBody,
        provider: str | None = Query(default=None),
        merchant_id: str = Depends(api_require_admitted_merchant),
    ) -> JSONResponse:
        """Normalize one provider webhook payload into a canonical chargeback record.

        Args:
            request_body: Request body with raw provider payload.
            provider: Provider identifier query parameter.
            merchant_id: Authenticated merchant identifier.

        Returns:
            JSONResponse: `{"result": record}` with processed marker header.

        Raises:
            WebhookError: Raised for taxonomy failures; translated by registered handlers.
        """

        normalized_provider = (provider or "").strip()
        if not normalized_provider:
            payload = api_build_error_payload(
                WebhookErrorType.VALIDATION_ERROR.value,
                "Missing required query parameter: provider",
                [ErrorDetail(issue="Please provide a provider query parameter, e.g., ?provider=stripe")],
            )
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        started_at = time.perf_counter()
        try:
            processing_result = webhook_processor.webhook_process(request_body.payload, normalized_provider)
        except WebhookError as error:
            logger.info(
                "webhook request failed provider=%s merchant=%s duration_ms=%d error=%s",
                normalized_provider,
                merchant_id,
                _api_elapsed_ms(started_at),
                error.error_name.value,
            )
            raise

        logger.info(
            "webhook request processed provider=%s merchant=%s duration_ms=%d",
            normalized_provider,
            merchant_id,
            _api_elapsed_ms(started_at),
        )
        logger.debug(
            "webhook request timeline provider=%s timeline=%s",
            normalized_provider,
            processing_result.timeline,
        )
        return JSONResponse(
            content={"result": api_json_safe(processing_result.record)},
            status_code=status.HTTP_200_OK,
            headers={WEBHOOK_PROCESSED_HEADER: "true"},
        )

    return router


def api_json_safe(value: Any) -> Any:
    """Replace non-finite floats with None so records serialize as strict JSON.

    Args:
        value: JSON-compatible value.

    Returns:
        Any: Value with NaN and infinities rendered as null.
    """

    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: api_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [api_json_safe(item) for item in value]
    return value


def _api_elapsed_ms(started_at: float) -> int:
    return int((time.perf_counter() - started_at) * 1000)
