"""Tests for the offline `map` command entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.config import AppSettings
from app.main import main_map_payload_file


def _write_payload(tmp_path: Path, payload: dict[str, object]) -> Path:
    payload_file = tmp_path / "payload.json"
    payload_file.write_text(json.dumps(payload), encoding="utf-8")
    return payload_file


def _build_dispute_event() -> dict[str, object]:
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


def test_main_map_payload_file_prints_canonical_record(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print the canonical record for a valid payload file.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate output and exit code.

    Raises:
        AssertionError: Raised when output differs from expectation.
    """

    exit_code = main_map_payload_file("stripe", _write_payload(tmp_path, _build_dispute_event()), AppSettings())

    assert exit_code == 0
    printed_result = json.loads(capsys.readouterr().out)
    assert printed_result["result"]["transaction_id"] == "ch_1"
    assert printed_result["result"]["currency"] == "USD"


def test_main_map_payload_file_reports_error_body(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_map_payload_file("paypal", _write_payload(tmp_path, _build_dispute_event()), AppSettings())

    assert exit_code == 1
    error_body = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert error_body["error"] == "ProviderError"
    assert error_body["details"] == [{"issue": "Supported providers: stripe"}]


def test_main_map_payload_file_includes_timeline_when_requested(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Print the stage timeline next to the record on request.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate timeline output.

    Raises:
        AssertionError: Raised when the timeline is missing.
    """

    exit_code = main_map_payload_file(
        "stripe",
        _write_payload(tmp_path, _build_dispute_event()),
        AppSettings(),
        include_timeline=True,
    )

    assert exit_code == 0
    printed_result = json.loads(capsys.readouterr().out)
    assert printed_result["timeline"][0]["stage"] == "lookup_provider"
    assert printed_result["timeline"][-1]["stage"] == "post_process"
    assert {event["status"] for event in printed_result["timeline"]} == {"completed"}


def test_main_map_payload_file_omits_timeline_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_map_payload_file("stripe", _write_payload(tmp_path, _build_dispute_event()), AppSettings())

    assert "timeline" not in json.loads(capsys.readouterr().out)
