"""Regression tests for webhook orchestrator stage transitions and error classification."""

# pylint: disable=duplicate-code

from __future__ import annotations

from typing import Any

import pytest

from app.domain import (
    EventTypeNotFoundError,
    MappingExecutionError,
    MappingExpressionNotFoundError,
    PayloadValidationError,
    ProviderNotFoundError,
    UnclassifiedWebhookError,
    WebhookErrorName,
)
from app.mapping import JsonataMappingEngine, MapperRegistry, PayloadValidationResult, mapping_build_registry
from app.providers import StripeWebhookMapper
from app.webhooks import WebhookOrchestrator, WebhookPipelineStage


def _build_dispute_event() -> dict[str, Any]:
    """Create a valid Stripe `charge.dispute.created` event.

    Returns:
        dict[str, Any]: Deterministic event payload.
    """

    return {
        "object": "event",
        "type": "charge.dispute.created",
        "data": {
            "object": {
                "object": "dispute",
                "charge": "ch_1",
                "reason": "fraudulent",
                "currency": "usd",
                "amount": 5000,
            }
        },
    }


def _build_orchestrator(**mapper_options: Any) -> WebhookOrchestrator:
    """Create orchestrator wired with the Stripe mapper and JSONata engine.

    Args:
        mapper_options: Optional Stripe mapper constructor overrides.

    Returns:
        WebhookOrchestrator: Orchestrator under test.
    """

    return WebhookOrchestrator(
        registry=mapping_build_registry([StripeWebhookMapper(**mapper_options)]),
        mapping_engine=JsonataMappingEngine(),
    )


class _BareMapperStub:
    """Mapper stub without pre-processing or post-processing capabilities."""

    def __init__(self, expression: str | None = '{"id": id, "kind": "bare"}'):
        """Initialize stub with the expression it resolves.

        Args:
            expression: Expression returned for the `ping` event type.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._expression = expression

    def mapper_provider_name(self) -> str:
        return "bare"

    def mapper_supported_event_types(self) -> tuple[str, ...]:
        return ("ping",)

    def mapper_extract_event_type(self, payload: Any) -> str | None:
        return payload.get("event")

    def mapper_verify_event_type(self, event_type: str) -> bool:
        return event_type == "ping"

    def mapper_validate_payload(self, payload: Any) -> PayloadValidationResult:
        if not isinstance(payload, dict):
            return PayloadValidationResult.mapping_fail("Payload must be an object")
        return PayloadValidationResult.mapping_ok()

    def mapper_get_mapping_expression(self, event_type: str) -> str | None:
        _ = event_type
        return self._expression


class _CrashingEngineStub:
    """Mapping engine stub that fails with a non-taxonomy exception."""

    def mapping_engine_name(self) -> str:
        return "crashing"

    def mapping_evaluate(self, expression: str, payload: Any) -> Any:
        """Raise deterministic runtime error.

        Args:
            expression: Mapping expression.
            payload: Input payload.

        Returns:
            Any: This method does not return.

        Raises:
            RuntimeError: Always raised by this stub.
        """

        _ = (expression, payload)
        raise RuntimeError("engine exploded")


def test_webhooks_orchestrator_normalizes_stripe_dispute_event() -> None:
    """Map a valid Stripe dispute into the canonical chargeback record.

    Returns:
        None: Assertions validate record and stage timeline.

    Raises:
        AssertionError: Raised when record or timeline differ from expectation.
    """

    result = _build_orchestrator().webhook_process(_build_dispute_event(), "stripe")

    assert result.provider == "stripe"
    assert result.event_type == "charge.dispute.created"
    assert result.record == {
        "transaction_id": "ch_1",
        "reason": "fraudulent",
        "currency": "USD",
        "amount": 5000,
        "provider": "stripe",
    }
    assert [event["stage"] for event in result.timeline] == [stage.value for stage in WebhookPipelineStage]
    assert {event["status"] for event in result.timeline} == {"completed"}


def test_webhooks_orchestrator_accepts_provider_in_any_case() -> None:
    result = _build_orchestrator().webhook_process(_build_dispute_event(), "STRIPE")

    assert result.provider == "stripe"


def test_webhooks_orchestrator_coerces_string_amount() -> None:
    payload = _build_dispute_event()
    payload["data"]["object"]["amount"] = "5000"

    result = _build_orchestrator().webhook_process(payload, "stripe")

    assert result.record["amount"] == 5000


def test_webhooks_orchestrator_maps_numeric_charge_to_text_transaction_id() -> None:
    """Accept a numeric charge reference and emit it as text.

    Returns:
        None: Assertions validate mapped transaction id.

    Raises:
        AssertionError: Raised when numeric references are rejected.
    """

    payload = _build_dispute_event()
    payload["data"]["object"]["charge"] = 12345

    result = _build_orchestrator().webhook_process(payload, "stripe")

    assert result.record["transaction_id"] == "12345"


def test_webhooks_orchestrator_rejects_infinite_amount_by_default() -> None:
    payload = _build_dispute_event()
    payload["data"]["object"]["amount"] = "Infinity"

    with pytest.raises(MappingExecutionError):
        _build_orchestrator().webhook_process(payload, "stripe")


def test_webhooks_orchestrator_raises_provider_not_found_for_unknown_provider() -> None:
    """Fail at lookup when no mapper is registered.

    Returns:
        None: Assertions validate failure kind and message.

    Raises:
        AssertionError: Raised when the provider failure is not reported.
    """

    with pytest.raises(ProviderNotFoundError) as error_info:
        _build_orchestrator().webhook_process(_build_dispute_event(), "paypal")

    assert error_info.value.message == "Provider 'paypal' is not supported"


def test_webhooks_orchestrator_empty_registry_rejects_every_provider() -> None:
    orchestrator = WebhookOrchestrator(registry=MapperRegistry({}), mapping_engine=JsonataMappingEngine())

    with pytest.raises(ProviderNotFoundError):
        orchestrator.webhook_process(_build_dispute_event(), "stripe")
    assert orchestrator.webhook_supported_providers() == []


def test_webhooks_orchestrator_raises_payload_validation_with_field_detail() -> None:
    """Surface the first validation violation with its field path.

    Returns:
        None: Assertions validate failure details.

    Raises:
        AssertionError: Raised when the violation detail is missing.
    """

    payload = _build_dispute_event()
    del payload["data"]["object"]["charge"]

    with pytest.raises(PayloadValidationError) as error_info:
        _build_orchestrator().webhook_process(payload, "stripe")

    assert error_info.value.message == "Missing 'charge' field in dispute object"
    assert error_info.value.details[0].field == "data.object.charge"


def test_webhooks_orchestrator_raises_event_type_not_found_for_unsupported_type() -> None:
    payload = _build_dispute_event()
    payload["type"] = "charge.refunded"
    payload["data"]["object"]["object"] = "charge"

    with pytest.raises(EventTypeNotFoundError) as error_info:
        _build_orchestrator().webhook_process(payload, "stripe")

    assert error_info.value.event_type == "unknown"
    assert error_info.value.provider == "stripe"
    assert error_info.value.details[0].issue == "Supported event types: charge.dispute.created"


def test_webhooks_orchestrator_raises_event_type_not_found_when_type_is_unmapped() -> None:
    with pytest.raises(EventTypeNotFoundError) as error_info:
        _build_orchestrator(mapping_expressions={}).webhook_process(_build_dispute_event(), "stripe")

    assert error_info.value.event_type == "charge.dispute.created"


def test_webhooks_orchestrator_raises_expression_not_found_for_blank_expression() -> None:
    """Fail at expression resolution when a verified type maps to a blank expression.

    Returns:
        None: Assertions validate failure kind.

    Raises:
        AssertionError: Raised when resolution failure is not reported.
    """

    orchestrator = WebhookOrchestrator(
        registry=mapping_build_registry([_BareMapperStub(expression=None)]),
        mapping_engine=JsonataMappingEngine(),
    )

    with pytest.raises(MappingExpressionNotFoundError) as error_info:
        orchestrator.webhook_process({"event": "ping", "id": "p_1"}, "bare")

    assert error_info.value.message == "No mapping expression found for event type 'ping' in provider 'bare'"


def test_webhooks_orchestrator_raises_mapping_execution_for_non_numeric_amount() -> None:
    payload = _build_dispute_event()
    payload["data"]["object"]["amount"] = "abc"

    with pytest.raises(MappingExecutionError) as error_info:
        _build_orchestrator().webhook_process(payload, "stripe")

    assert error_info.value.message.startswith("Mapping execution failed: ")


def test_webhooks_orchestrator_raises_mapping_execution_for_broken_expression() -> None:
    broken_expressions = {"charge.dispute.created": '{"transaction_id": '}

    with pytest.raises(MappingExecutionError):
        _build_orchestrator(mapping_expressions=broken_expressions).webhook_process(_build_dispute_event(), "stripe")


def test_webhooks_orchestrator_skips_absent_capabilities() -> None:
    """Skip pre-process and post-process stages for mappers lacking them.

    Returns:
        None: Assertions validate raw result and skipped stages.

    Raises:
        AssertionError: Raised when optional stages are not skipped.
    """

    orchestrator = WebhookOrchestrator(
        registry=mapping_build_registry([_BareMapperStub()]),
        mapping_engine=JsonataMappingEngine(),
    )

    result = orchestrator.webhook_process({"event": "ping", "id": "p_1"}, "bare")

    assert result.record == {"id": "p_1", "kind": "bare"}
    statuses = {event["stage"]: event["status"] for event in result.timeline}
    assert statuses[WebhookPipelineStage.PRE_PROCESS.value] == "skipped"
    assert statuses[WebhookPipelineStage.POST_PROCESS.value] == "skipped"


def test_webhooks_orchestrator_wraps_unexpected_failure_as_unclassified() -> None:
    """Wrap non-taxonomy collaborator failures and keep the original cause.

    Returns:
        None: Assertions validate wrapping.

    Raises:
        AssertionError: Raised when failure is not wrapped.
    """

    orchestrator = WebhookOrchestrator(
        registry=mapping_build_registry([StripeWebhookMapper()]),
        mapping_engine=_CrashingEngineStub(),
    )

    with pytest.raises(UnclassifiedWebhookError) as error_info:
        orchestrator.webhook_process(_build_dispute_event(), "stripe")

    assert error_info.value.error_name == WebhookErrorName.UNCLASSIFIED
    assert error_info.value.message == "engine exploded"
    assert isinstance(error_info.value.__cause__, RuntimeError)


def test_webhooks_orchestrator_rejects_missing_dependencies() -> None:
    with pytest.raises(ValueError):
        WebhookOrchestrator(registry=None, mapping_engine=JsonataMappingEngine())  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        WebhookOrchestrator(registry=MapperRegistry({}), mapping_engine=None)  # type: ignore[arg-type]
