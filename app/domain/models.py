"""Typed domain models shared across runtime layers.

This module provides the canonical chargeback contract every provider maps
into, plus the error-detail record surfaced by taxonomy failures.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanonicalChargebackRecord:
    """Normalized chargeback record produced by the webhook pipeline.

    Attributes:
        transaction_id: Provider transaction reference the chargeback targets.
        reason: Provider chargeback reason code.
        currency: ISO 4217 currency code, uppercase.
        amount: Numeric chargeback amount in provider minor or major units.
        provider: Optional lowercase provider identifier.
    """

    transaction_id: str
    reason: str
    currency: str
    amount: int | float
    provider: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize record to JSON-compatible payload.

        Returns:
            dict[str, object]: Record payload; `provider` omitted when absent.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload: dict[str, object] = {
            "transaction_id": self.transaction_id,
            "reason": self.reason,
            "currency": self.currency,
            "amount": self.amount,
        }
        if self.provider is not None:
            payload["provider"] = self.provider
        return payload


@dataclass(frozen=True)
class ErrorDetail:
    """One detail entry attached to a taxonomy failure.

    Attributes:
        issue: Human-readable description of the problem.
        field: Optional dotted path of the offending payload field.
    """

    issue: str
    field: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Serialize detail to JSON-compatible payload.

        Returns:
            dict[str, str]: Detail payload; `field` omitted when absent.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload = {"issue": self.issue}
        if self.field is not None:
            payload = {"field": self.field, "issue": self.issue}
        return payload
