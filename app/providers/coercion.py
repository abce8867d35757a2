"""Shared canonical-record coercion helpers for provider post-processing."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from app.config import AmountCoercionPolicy
from app.domain import CanonicalChargebackRecord, MappingExecutionError

_REQUIRED_TEXT_FIELDS = ("transaction_id", "reason", "currency")


def provider_coerce_amount(value: Any, policy: AmountCoercionPolicy) -> int | float:
    """Convert a mapped amount into a numeric value.

    Numbers pass through, booleans become 0/1, numeric strings are parsed and
    stay integral when they carry no fraction. Digit separators, NaN and
    infinities are not numbers here. Anything else follows the configured
    policy: `reject` raises, `propagate_nan` yields NaN.

    Args:
        value: Mapped amount value.
        policy: Handling for values that cannot be converted.

    Returns:
        int | float: Numeric amount.

    Raises:
        MappingExecutionError: Raised when the value is not numeric and policy is `reject`.
    """

    converted_value = _provider_convert_number(value)
    if isinstance(converted_value, int) or (converted_value is not None and math.isfinite(converted_value)):
        return converted_value

    if policy == "propagate_nan":
        return math.nan
    raise MappingExecutionError(f"Invalid amount: cannot be converted to a number ({value!r})")


def provider_build_canonical_record(
    result: Any,
    policy: AmountCoercionPolicy,
) -> CanonicalChargebackRecord:
    """Enforce canonical record invariants over a mapped result.

    Args:
        result: Mapping engine output, expected to be an object.
        policy: Amount coercion policy.

    Returns:
        CanonicalChargebackRecord: Record with uppercase currency and numeric amount.

    Raises:
        MappingExecutionError: Raised when the result is not an object or a required field is empty.
    """

    if not isinstance(result, Mapping):
        raise MappingExecutionError(f"Mapped result must be an object, got {type(result).__name__}")

    text_values: dict[str, str] = {}
    for field_name in _REQUIRED_TEXT_FIELDS:
        raw_value = result.get(field_name)
        normalized_value = _provider_text_value(raw_value)
        if normalized_value == "":
            raise MappingExecutionError(f"Mapped result is missing '{field_name}'")
        text_values[field_name] = normalized_value

    provider_value = result.get("provider")
    return CanonicalChargebackRecord(
        transaction_id=text_values["transaction_id"],
        reason=text_values["reason"],
        currency=text_values["currency"].upper(),
        amount=provider_coerce_amount(result.get("amount"), policy),
        provider=str(provider_value) if provider_value is not None else None,
    )


def _provider_convert_number(value: Any) -> int | float | None:
    """Apply generic numeric conversion.

    Args:
        value: Candidate value.

    Returns:
        int | float | None: Converted number, or None when not convertible.
    """

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return int(value) if value == value.to_integral_value() else float(value)
    if not isinstance(value, str):
        return None

    stripped_value = value.strip()
    if not stripped_value:
        return 0
    if "_" in stripped_value:
        return None
    try:
        return int(stripped_value)
    except ValueError:
        pass
    try:
        parsed_value = Decimal(stripped_value)
    except InvalidOperation:
        return None
    if not parsed_value.is_finite():
        return None
    return float(parsed_value)


def _provider_text_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
