"""Per-merchant fixed-window rate limiting backed by the `limits` library."""

from __future__ import annotations

import math
import time

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter

from app.config import AppSettings

from .errors import RateLimitExceededError

_RATE_LIMIT_NAMESPACE = "merchant"


class MerchantRateLimiter:
    """Admits or rejects requests keyed by merchant identity only."""

    def __init__(self, requests: int, window_seconds: int, storage: Storage | None = None):
        """Initialize limiter with one request budget per window.

        Args:
            requests: Accepted requests per merchant and window.
            window_seconds: Window length in seconds.
            storage: Optional `limits` storage backend; in-memory by default.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when budget or window is not positive.
        """

        if requests < 1:
            raise ValueError("requests must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit_item = RateLimitItemPerSecond(requests, window_seconds)
        self._strategy = FixedWindowRateLimiter(storage or MemoryStorage())

    def security_admit(self, merchant_id: str) -> None:
        """Consume one request from the merchant budget.

        Args:
            merchant_id: Authenticated merchant identifier.

        Returns:
            None: Returns when the request is admitted.

        Raises:
            RateLimitExceededError: Raised when the merchant budget is exhausted.
        """

        if self._strategy.hit(self._limit_item, _RATE_LIMIT_NAMESPACE, merchant_id):
            return

        reset_time, _remaining = self._strategy.get_window_stats(self._limit_item, _RATE_LIMIT_NAMESPACE, merchant_id)
        retry_after_seconds = max(1, math.ceil(reset_time - time.time()))
        raise RateLimitExceededError(merchant_id=merchant_id, retry_after_seconds=retry_after_seconds)


def security_build_rate_limiter(settings: AppSettings) -> MerchantRateLimiter:
    """Build merchant rate limiter from runtime settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        MerchantRateLimiter: Limiter using in-memory counters.
    """

    return MerchantRateLimiter(
        requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
