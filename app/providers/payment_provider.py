"""Payment provider identifiers known to the service."""

from __future__ import annotations

from enum import Enum


class PaymentProvider(str, Enum):
    """Lowercase provider identifiers used as registry keys."""

    STRIPE = "stripe"
