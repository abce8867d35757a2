"""Typed interfaces for provider mappers and the mapping expression engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from app.domain import CanonicalChargebackRecord


@dataclass(frozen=True)
class PayloadValidationResult:
    """Outcome of one structural payload validation pass.

    Attributes:
        valid: True when the payload passed every check.
        error: First violation message when invalid.
        field: Dotted path of the first failing field when known.
    """

    valid: bool
    error: str | None = None
    field: str | None = None

    @classmethod
    def mapping_ok(cls) -> PayloadValidationResult:
        """Return a passing validation result.

        Returns:
            PayloadValidationResult: Valid result without error details.
        """

        return cls(valid=True)

    @classmethod
    def mapping_fail(cls, error: str, field: str | None = None) -> PayloadValidationResult:
        """Return a failing validation result.

        Args:
            error: Violation message naming the offending field.
            field: Optional dotted field path.

        Returns:
            PayloadValidationResult: Invalid result carrying the first violation.
        """

        return cls(valid=False, error=error, field=field)


class WebhookMapperPort(Protocol):
    """Port definition every provider adapter implements.

    Implementations are stateless and safe to share across concurrent
    requests once registered.
    """

    def mapper_provider_name(self) -> str:
        """Return stable lowercase provider identifier.

        Returns:
            str: Provider identifier used as registry key.
        """

    def mapper_supported_event_types(self) -> tuple[str, ...]:
        """Return event types recognized by this provider.

        Returns:
            tuple[str, ...]: Recognized event types in declaration order.
        """

    def mapper_extract_event_type(self, payload: Any) -> str | None:
        """Locate the provider-specific event type in a payload.

        Args:
            payload: Raw webhook payload.

        Returns:
            str | None: Recognized event type, or None when absent or unknown.

        Raises:
            RuntimeError: Implementations must not raise for malformed payloads.
        """

    def mapper_verify_event_type(self, event_type: str) -> bool:
        """Check that an event type is recognized and has a mapping expression.

        Args:
            event_type: Event type to check.

        Returns:
            bool: True when the event type can be mapped.
        """

    def mapper_validate_payload(self, payload: Any) -> PayloadValidationResult:
        """Validate payload structure independent of event type.

        Args:
            payload: Raw webhook payload.

        Returns:
            PayloadValidationResult: First encountered violation or a passing result.
        """

    def mapper_get_mapping_expression(self, event_type: str) -> str | None:
        """Return mapping expression text for one event type.

        Args:
            event_type: Event type to resolve.

        Returns:
            str | None: Expression text, or None when no expression is registered.
        """


@runtime_checkable
class PayloadPreProcessorPort(Protocol):
    """Optional capability applied before event extraction and mapping."""

    def mapper_pre_process_payload(self, payload: Any) -> Any:
        """Transform the payload before extraction.

        Args:
            payload: Validated webhook payload.

        Returns:
            Any: Payload used by the remaining pipeline stages.
        """


@runtime_checkable
class ResultPostProcessorPort(Protocol):
    """Optional capability applied to the mapped result."""

    def mapper_post_process_result(self, result: Any) -> CanonicalChargebackRecord:
        """Enforce canonical invariants on a mapped result.

        Args:
            result: Mapping engine output.

        Returns:
            CanonicalChargebackRecord: Canonical record.

        Raises:
            MappingExecutionError: Raised when the result cannot satisfy the canonical contract.
        """


class MappingEnginePort(Protocol):
    """Port definition for declarative JSON-to-JSON expression evaluation."""

    def mapping_engine_name(self) -> str:
        """Return expression dialect identifier.

        Returns:
            str: Dialect name and version label.
        """

    def mapping_evaluate(self, expression: str, payload: Any) -> Any:
        """Compile and evaluate one expression against a payload.

        Args:
            expression: Expression text.
            payload: JSON-compatible input document.

        Returns:
            Any: Non-null evaluation result.

        Raises:
            MappingExecutionError: Raised on compile failure, evaluation failure or empty result.
        """
