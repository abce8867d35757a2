"""Tests for canonical record coercion shared by provider post-processors."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from app.domain import MappingExecutionError
from app.providers.coercion import provider_build_canonical_record, provider_coerce_amount


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5000, 5000),
        (12.5, 12.5),
        ("5000", 5000),
        (" 12.50 ", 12.5),
        ("", 0),
        (True, 1),
        (Decimal("7"), 7),
    ],
)
def test_providers_coerce_amount_converts_numeric_values(value: object, expected: float) -> None:
    """Convert numbers and numeric strings without loss.

    Args:
        value: Mapped amount.
        expected: Expected numeric value.

    Returns:
        None: Assertions validate conversion.

    Raises:
        AssertionError: Raised when conversion differs from expectation.
    """

    assert provider_coerce_amount(value, "reject") == expected


def test_providers_coerce_amount_keeps_integral_strings_integral() -> None:
    assert isinstance(provider_coerce_amount("5000", "reject"), int)


@pytest.mark.parametrize(
    "value",
    ["abc", "NaN", "1_000", "Infinity", "-inf", float("inf"), Decimal("Infinity"), None, {"value": 1}, [1]],
)
def test_providers_coerce_amount_rejects_non_numeric_values(value: object) -> None:
    with pytest.raises(MappingExecutionError):
        provider_coerce_amount(value, "reject")


@pytest.mark.parametrize("value", ["abc", "1_000", "Infinity"])
def test_providers_coerce_amount_propagates_nan_when_configured(value: str) -> None:
    assert math.isnan(provider_coerce_amount(value, "propagate_nan"))


def test_providers_build_canonical_record_requires_object_result() -> None:
    with pytest.raises(MappingExecutionError) as error_info:
        provider_build_canonical_record(["ch_1"], "reject")

    assert "must be an object" in error_info.value.message


def test_providers_build_canonical_record_requires_text_fields() -> None:
    """Reject mapped results whose required text fields are empty.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when an incomplete result is accepted.
    """

    with pytest.raises(MappingExecutionError) as error_info:
        provider_build_canonical_record(
            {"transaction_id": "ch_1", "reason": "", "currency": "usd", "amount": 1},
            "reject",
        )

    assert "'reason'" in error_info.value.message


def test_providers_build_canonical_record_stringifies_numeric_text_fields() -> None:
    """Keep numeric and whitespace text values as their string form.

    Returns:
        None: Assertions validate record text fields.

    Raises:
        AssertionError: Raised when text values are dropped or altered.
    """

    record = provider_build_canonical_record(
        {"transaction_id": 12345, "reason": " ", "currency": "usd", "amount": 1},
        "reject",
    )

    assert record.transaction_id == "12345"
    assert record.reason == " "
    assert record.currency == "USD"


def test_providers_build_canonical_record_drops_fraction_of_integral_float_text() -> None:
    record = provider_build_canonical_record(
        {"transaction_id": 12345.0, "reason": "fraudulent", "currency": "usd", "amount": 1},
        "reject",
    )

    assert record.transaction_id == "12345"
