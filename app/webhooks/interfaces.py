"""Typed interfaces for webhook pipeline orchestration."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class WebhookPipelineStage(str, Enum):
    """Linear pipeline states in execution order."""

    LOOKUP_PROVIDER = "lookup_provider"
    VALIDATE_PAYLOAD = "validate_payload"
    PRE_PROCESS = "pre_process"
    EXTRACT_EVENT_TYPE = "extract_event_type"
    VERIFY_EVENT_TYPE = "verify_event_type"
    RESOLVE_EXPRESSION = "resolve_expression"
    EVALUATE = "evaluate"
    POST_PROCESS = "post_process"


@dataclass(frozen=True)
class WebhookProcessingResult:
    """Result contract for one successful pipeline run.

    Attributes:
        provider: Normalized provider identifier.
        event_type: Verified provider event type.
        record: Canonical chargeback record payload, or the raw mapped result when the
            mapper has no post-processing capability.
        timeline: Ordered stage events recorded during the run.
    """

    provider: str
    event_type: str
    record: Any
    timeline: tuple[dict[str, object], ...]


class WebhookProcessorPort(Protocol):
    """Port definition for normalizing one provider webhook payload."""

    def webhook_supported_providers(self) -> list[str]:
        """Return provider identifiers the processor can handle.

        Returns:
            list[str]: Provider identifiers in registration order.
        """

    def webhook_process(self, payload: Any, provider_id: str) -> WebhookProcessingResult:
        """Normalize one webhook payload into a canonical chargeback record.

        Args:
            payload: Raw provider webhook payload.
            provider_id: Provider identifier in any letter case.

        Returns:
            WebhookProcessingResult: Canonical record and stage timeline.

        Raises:
            WebhookError: Raised with the taxonomy kind bound to the failing stage.
        """
