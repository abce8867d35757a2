"""Typed exceptions raised by request guards ahead of the webhook pipeline."""

from __future__ import annotations


class GuardRejectionError(Exception):
    """Base exception for requests rejected before pipeline execution.

    Attributes:
        message: Human-readable rejection reason.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MerchantAuthenticationError(GuardRejectionError):
    """API key or merchant identity could not be verified."""


class RateLimitExceededError(GuardRejectionError):
    """Merchant exceeded its request budget for the current window."""

    def __init__(self, merchant_id: str, retry_after_seconds: int):
        super().__init__(f"Rate limit exceeded for merchant '{merchant_id}'")
        self.merchant_id = merchant_id
        self.retry_after_seconds = retry_after_seconds
