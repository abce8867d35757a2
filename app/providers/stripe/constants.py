"""Stripe event, object and mapping tables.

New Stripe event types or object subtypes are added here as data; the mapper
reads these tables and needs no code change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping

from app.providers.payment_provider import PaymentProvider


class StripeEventType(str, Enum):
    """Stripe webhook event types recognized by the mapper."""

    CHARGE_DISPUTE_CREATED = "charge.dispute.created"


class StripeObjectType(str, Enum):
    """Stripe `data.object.object` subtypes with field validation rules."""

    DISPUTE = "dispute"


class StripeDisputeField(str, Enum):
    """Required field names of a Stripe dispute object."""

    CHARGE = "charge"
    REASON = "reason"
    CURRENCY = "currency"
    AMOUNT = "amount"


@dataclass(frozen=True)
class StripeRequiredField:
    """Validation rule for one required object field.

    Attributes:
        field: Field name inside `data.object`.
        error: Violation message naming the field.
        require_text: True when the value must be a non-empty string or a number; otherwise any non-empty value passes.
    """

    field: str
    error: str
    require_text: bool = True


STRIPE_EVENT_ENVELOPE_OBJECT: Final[str] = "event"

STRIPE_MESSAGE_EMPTY_PAYLOAD: Final[str] = "Payload is empty or null"
STRIPE_MESSAGE_INVALID_ENVELOPE_OBJECT: Final[str] = "Expected 'object' field to be 'event' for Stripe webhook"
STRIPE_MESSAGE_MISSING_TYPE: Final[str] = "Missing 'type' field in Stripe webhook"
STRIPE_MESSAGE_MISSING_DATA: Final[str] = "Missing 'data' field in Stripe webhook"
STRIPE_MESSAGE_MISSING_DATA_OBJECT: Final[str] = "Missing 'data.object' field in Stripe webhook"

STRIPE_OBJECT_REQUIRED_FIELDS: Final[Mapping[str, tuple[StripeRequiredField, ...]]] = MappingProxyType(
    {
        StripeObjectType.DISPUTE.value: (
            StripeRequiredField(
                field=StripeDisputeField.CHARGE.value,
                error="Missing 'charge' field in dispute object",
            ),
            StripeRequiredField(
                field=StripeDisputeField.REASON.value,
                error="Missing 'reason' field in dispute object",
            ),
            StripeRequiredField(
                field=StripeDisputeField.CURRENCY.value,
                error="Missing 'currency' field in dispute object",
            ),
            StripeRequiredField(
                field=StripeDisputeField.AMOUNT.value,
                error="Missing 'amount' field in dispute object",
                require_text=False,
            ),
        ),
    }
)

STRIPE_MAPPING_EXPRESSIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        StripeEventType.CHARGE_DISPUTE_CREATED.value: f"""
    {{
      "transaction_id": data.object.charge,
      "reason": data.object.reason,
      "currency": $uppercase(data.object.currency),
      "amount": data.object.amount,
      "provider": "{PaymentProvider.STRIPE.value}"
    }}
""",
    }
)
