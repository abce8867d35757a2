"""Project-native typed exceptions for the webhook normalization pipeline."""

from __future__ import annotations

from enum import Enum

from .models import ErrorDetail


class WebhookErrorName(str, Enum):
    """Closed set of taxonomy error kinds raised by the pipeline."""

    PROVIDER_NOT_FOUND = "ProviderNotFoundError"
    EVENT_TYPE_NOT_FOUND = "EventTypeNotFoundError"
    MAPPING_EXPRESSION_NOT_FOUND = "MappingExpressionNotFoundError"
    PAYLOAD_VALIDATION = "PayloadValidationError"
    MAPPING_EXECUTION = "MappingExecutionError"
    UNCLASSIFIED = "UnclassifiedWebhookError"


class WebhookErrorType(str, Enum):
    """Error categories returned in webhook error responses."""

    PROVIDER_ERROR = "ProviderError"
    VALIDATION_ERROR = "ValidationError"
    MAPPING_ERROR = "MappingError"
    INTERNAL_ERROR = "InternalError"


class WebhookError(Exception):
    """Base exception for taxonomy failures raised by the pipeline.

    Attributes:
        error_name: Taxonomy kind of this failure.
        message: Human-readable failure message.
        details: Optional structured details.
    """

    error_name: WebhookErrorName = WebhookErrorName.UNCLASSIFIED

    def __init__(self, message: str, details: tuple[ErrorDetail, ...] = ()):
        super().__init__(message)
        self.message = message
        self.details = tuple(details)


class ProviderNotFoundError(WebhookError):
    """No mapper is registered for the requested provider identifier."""

    error_name = WebhookErrorName.PROVIDER_NOT_FOUND

    def __init__(self, provider: str):
        super().__init__(f"Provider '{provider}' is not supported")
        self.provider = provider


class EventTypeNotFoundError(WebhookError):
    """Event type is absent from the payload or unknown to the provider."""

    error_name = WebhookErrorName.EVENT_TYPE_NOT_FOUND

    def __init__(self, event_type: str, provider: str, supported_event_types: tuple[str, ...] = ()):
        details: tuple[ErrorDetail, ...] = ()
        if supported_event_types:
            details = (ErrorDetail(issue=f"Supported event types: {', '.join(supported_event_types)}"),)
        super().__init__(
            f"Event type '{event_type}' not found in payload or not supported for provider '{provider}'",
            details=details,
        )
        self.event_type = event_type
        self.provider = provider
        self.supported_event_types = tuple(supported_event_types)


class MappingExpressionNotFoundError(WebhookError):
    """Recognized event type has no registered mapping expression."""

    error_name = WebhookErrorName.MAPPING_EXPRESSION_NOT_FOUND

    def __init__(self, event_type: str, provider: str):
        super().__init__(f"No mapping expression found for event type '{event_type}' in provider '{provider}'")
        self.event_type = event_type
        self.provider = provider


class PayloadValidationError(WebhookError):
    """Structural payload check failed; carries the first violation only."""

    error_name = WebhookErrorName.PAYLOAD_VALIDATION

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details=(ErrorDetail(issue=message, field=field),))
        self.field = field


class MappingExecutionError(WebhookError):
    """Expression compile, evaluation or empty-result failure."""

    error_name = WebhookErrorName.MAPPING_EXECUTION

    def __init__(self, message: str):
        super().__init__(f"Mapping execution failed: {message}")


class UnclassifiedWebhookError(WebhookError):
    """Unexpected failure raised by a pipeline collaborator."""

    error_name = WebhookErrorName.UNCLASSIFIED

    def __init__(self, message: str | None = None):
        super().__init__(message or "An unexpected error occurred")
