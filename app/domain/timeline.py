"""Pipeline stage timeline helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Final

STAGE_STATUS_COMPLETED: Final[str] = "completed"
STAGE_STATUS_SKIPPED: Final[str] = "skipped"
STAGE_STATUS_FAILED: Final[str] = "failed"


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured pipeline stage event.

    Args:
        stage: Pipeline stage name.
        status: One of `completed`, `skipped`, `failed`.
        details: Optional structured details object.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        ValueError: Raised when status is not a known stage status.
    """

    if status not in (STAGE_STATUS_COMPLETED, STAGE_STATUS_SKIPPED, STAGE_STATUS_FAILED):
        raise ValueError(f"unsupported stage status={status}")

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        event_payload["details"] = dict(details)
    return event_payload
