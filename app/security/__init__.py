"""Request guard package for merchant authentication and rate limiting."""

from .errors import GuardRejectionError, MerchantAuthenticationError, RateLimitExceededError
from .merchant_auth import (
    InMemoryMerchantDirectory,
    MerchantConfig,
    MerchantDirectoryPort,
    security_authenticate_merchant,
    security_build_merchant_directory,
    security_extract_api_key,
)
from .rate_limit import MerchantRateLimiter, security_build_rate_limiter

__all__ = [
    "GuardRejectionError",
    "InMemoryMerchantDirectory",
    "MerchantAuthenticationError",
    "MerchantConfig",
    "MerchantDirectoryPort",
    "MerchantRateLimiter",
    "RateLimitExceededError",
    "security_authenticate_merchant",
    "security_build_merchant_directory",
    "security_build_rate_limiter",
    "security_extract_api_key",
]
