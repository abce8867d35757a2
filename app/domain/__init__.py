"""Domain models and error taxonomy used across application layer boundaries."""

from .errors import (
    EventTypeNotFoundError,
    MappingExecutionError,
    MappingExpressionNotFoundError,
    PayloadValidationError,
    ProviderNotFoundError,
    UnclassifiedWebhookError,
    WebhookError,
    WebhookErrorName,
    WebhookErrorType,
)
from .models import CanonicalChargebackRecord, ErrorDetail
from .timeline import (
    STAGE_STATUS_COMPLETED,
    STAGE_STATUS_FAILED,
    STAGE_STATUS_SKIPPED,
    domain_build_stage_event,
)

__all__ = [
    "CanonicalChargebackRecord",
    "ErrorDetail",
    "EventTypeNotFoundError",
    "MappingExecutionError",
    "MappingExpressionNotFoundError",
    "PayloadValidationError",
    "ProviderNotFoundError",
    "STAGE_STATUS_COMPLETED",
    "STAGE_STATUS_FAILED",
    "STAGE_STATUS_SKIPPED",
    "UnclassifiedWebhookError",
    "WebhookError",
    "WebhookErrorName",
    "WebhookErrorType",
    "domain_build_stage_event",
]
