"""Stripe webhook mapper implementation for dispute chargeback events."""

from __future__ import annotations

from typing import Any, Mapping

from app.config import AmountCoercionPolicy
from app.domain import CanonicalChargebackRecord
from app.mapping import (
    PayloadPreProcessorPort,
    PayloadValidationResult,
    ResultPostProcessorPort,
    WebhookMapperPort,
)
from app.providers.coercion import provider_build_canonical_record
from app.providers.payment_provider import PaymentProvider

from .constants import (
    STRIPE_EVENT_ENVELOPE_OBJECT,
    STRIPE_MAPPING_EXPRESSIONS,
    STRIPE_MESSAGE_EMPTY_PAYLOAD,
    STRIPE_MESSAGE_INVALID_ENVELOPE_OBJECT,
    STRIPE_MESSAGE_MISSING_DATA,
    STRIPE_MESSAGE_MISSING_DATA_OBJECT,
    STRIPE_MESSAGE_MISSING_TYPE,
    STRIPE_OBJECT_REQUIRED_FIELDS,
    StripeEventType,
    StripeRequiredField,
)


class StripeWebhookMapper(WebhookMapperPort, PayloadPreProcessorPort, ResultPostProcessorPort):
    """Maps Stripe dispute webhooks into canonical chargeback records."""

    def __init__(
        self,
        amount_coercion_policy: AmountCoercionPolicy = "reject",
        mapping_expressions: Mapping[str, str] | None = None,
        object_required_fields: Mapping[str, tuple[StripeRequiredField, ...]] | None = None,
    ):
        """Initialize Stripe mapper with its data tables.

        Args:
            amount_coercion_policy: Handling of non-numeric amounts during post-processing.
            mapping_expressions: Event type to JSONata expression table.
            object_required_fields: Object subtype to required field rules table.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when the coercion policy is unknown.
        """

        if amount_coercion_policy not in ("reject", "propagate_nan"):
            raise ValueError(f"unsupported amount_coercion_policy={amount_coercion_policy}")

        self._amount_coercion_policy: AmountCoercionPolicy = amount_coercion_policy
        self._mapping_expressions = dict(
            STRIPE_MAPPING_EXPRESSIONS if mapping_expressions is None else mapping_expressions
        )
        self._object_required_fields = dict(
            STRIPE_OBJECT_REQUIRED_FIELDS if object_required_fields is None else object_required_fields
        )
        self._event_types = tuple(event_type.value for event_type in StripeEventType)

    def mapper_provider_name(self) -> str:
        return PaymentProvider.STRIPE.value

    def mapper_supported_event_types(self) -> tuple[str, ...]:
        return self._event_types

    def mapper_extract_event_type(self, payload: Any) -> str | None:
        """Read the top-level `type` field when it is a recognized Stripe event type.

        Args:
            payload: Raw webhook payload.

        Returns:
            str | None: Event type, or None when missing or unrecognized.
        """

        if not isinstance(payload, Mapping):
            return None
        event_type = payload.get("type")
        if isinstance(event_type, str) and event_type in self._event_types:
            return event_type
        return None

    def mapper_verify_event_type(self, event_type: str) -> bool:
        return event_type in self._event_types and event_type in self._mapping_expressions

    def mapper_validate_payload(self, payload: Any) -> PayloadValidationResult:
        """Validate envelope shape, then required fields of known object subtypes.

        Unknown object subtypes pass without field checks. Only the first
        violation is reported.

        Args:
            payload: Raw webhook payload.

        Returns:
            PayloadValidationResult: First violation or a passing result.
        """

        envelope_result = self._stripe_validate_envelope(payload)
        if not envelope_result.valid:
            return envelope_result
        return self._stripe_validate_object_fields(payload["data"]["object"])

    def mapper_get_mapping_expression(self, event_type: str) -> str | None:
        expression = self._mapping_expressions.get(event_type)
        if not expression or not expression.strip():
            return None
        return expression

    def mapper_pre_process_payload(self, payload: Any) -> Any:
        return payload

    def mapper_post_process_result(self, result: Any) -> CanonicalChargebackRecord:
        """Uppercase currency and coerce amount to a number.

        Args:
            result: JSONata mapping output.

        Returns:
            CanonicalChargebackRecord: Canonical record.

        Raises:
            MappingExecutionError: Raised when the result cannot satisfy the canonical contract.
        """

        return provider_build_canonical_record(result, policy=self._amount_coercion_policy)

    def _stripe_validate_envelope(self, payload: Any) -> PayloadValidationResult:
        if payload is None:
            return PayloadValidationResult.mapping_fail(STRIPE_MESSAGE_EMPTY_PAYLOAD)
        if not isinstance(payload, Mapping) or payload.get("object") != STRIPE_EVENT_ENVELOPE_OBJECT:
            return PayloadValidationResult.mapping_fail(STRIPE_MESSAGE_INVALID_ENVELOPE_OBJECT, field="object")

        event_type = payload.get("type")
        if not isinstance(event_type, str) or not event_type.strip():
            return PayloadValidationResult.mapping_fail(STRIPE_MESSAGE_MISSING_TYPE, field="type")

        data = payload.get("data")
        if not isinstance(data, Mapping):
            return PayloadValidationResult.mapping_fail(STRIPE_MESSAGE_MISSING_DATA, field="data")
        if not isinstance(data.get("object"), Mapping):
            return PayloadValidationResult.mapping_fail(STRIPE_MESSAGE_MISSING_DATA_OBJECT, field="data.object")

        return PayloadValidationResult.mapping_ok()

    def _stripe_validate_object_fields(self, data_object: Mapping[str, Any]) -> PayloadValidationResult:
        object_type = data_object.get("object")
        if not isinstance(object_type, str):
            return PayloadValidationResult.mapping_ok()

        required_fields = self._object_required_fields.get(object_type)
        if required_fields is None:
            return PayloadValidationResult.mapping_ok()

        for required_field in required_fields:
            value = data_object.get(required_field.field)
            if required_field.require_text:
                is_present = _stripe_is_text_like(value)
            else:
                is_present = value is not None and value != ""
            if not is_present:
                return PayloadValidationResult.mapping_fail(
                    required_field.error,
                    field=f"data.object.{required_field.field}",
                )

        return PayloadValidationResult.mapping_ok()


def _stripe_is_text_like(value: Any) -> bool:
    """Check that a text field holds a non-empty string or a plain number.

    Numbers are accepted because post-processing stringifies them. Booleans
    are not treated as numbers here.

    Args:
        value: Raw field value.

    Returns:
        bool: True when the field counts as present.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and value != ""
