"""Merchant API key resolution and request identity guards."""

from __future__ import annotations

import hmac
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Protocol

from app.config import AppSettings

from .errors import MerchantAuthenticationError

logger = logging.getLogger(__name__)

_BEARER_PREFIX_PATTERN = re.compile(r"^Bearer\s+", re.IGNORECASE)


@dataclass(frozen=True)
class MerchantConfig:
    """Merchant credential entry.

    Attributes:
        merchant_id: Merchant identifier.
        api_key: Secret API key issued to the merchant.
        is_active: Whether the merchant may call the service.
    """

    merchant_id: str
    api_key: str
    is_active: bool = True


class MerchantDirectoryPort(Protocol):
    """Port definition for resolving merchant identity from credentials."""

    def security_resolve_api_key(self, api_key: str) -> str | None:
        """Resolve an API key to its active merchant identifier.

        Args:
            api_key: Cleaned API key.

        Returns:
            str | None: Merchant identifier, or None when unknown or inactive.
        """

    def security_is_active_merchant(self, merchant_id: str) -> bool:
        """Check that a merchant exists and is active.

        Args:
            merchant_id: Merchant identifier.

        Returns:
            bool: True for known active merchants.
        """


class InMemoryMerchantDirectory(MerchantDirectoryPort):
    """Read-only merchant directory loaded once at startup."""

    def __init__(self, merchants: Iterable[MerchantConfig]):
        self._merchants: dict[str, MerchantConfig] = {}
        for merchant in merchants:
            self._merchants[merchant.merchant_id] = merchant

    def security_resolve_api_key(self, api_key: str) -> str | None:
        if not api_key:
            return None
        for merchant in self._merchants.values():
            if merchant.is_active and hmac.compare_digest(merchant.api_key.encode(), api_key.encode()):
                return merchant.merchant_id
        return None

    def security_is_active_merchant(self, merchant_id: str) -> bool:
        if not merchant_id:
            return False
        merchant = self._merchants.get(merchant_id)
        return merchant is not None and merchant.is_active


def security_build_merchant_directory(settings: AppSettings) -> InMemoryMerchantDirectory:
    """Build merchant directory from runtime settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        InMemoryMerchantDirectory: Directory with activity flags applied.
    """

    inactive_merchant_ids = set(settings.inactive_merchant_ids)
    return InMemoryMerchantDirectory(
        MerchantConfig(
            merchant_id=merchant_id,
            api_key=api_key,
            is_active=merchant_id not in inactive_merchant_ids,
        )
        for merchant_id, api_key in settings.merchant_api_keys.items()
    )


def security_extract_api_key(authorization: str | None, api_key_header: str | None) -> str | None:
    """Extract a cleaned API key from request headers.

    `Authorization: Bearer <key>` wins over `X-Forter-API-Key`. A `Bearer `
    prefix on the fallback header is removed case-insensitively.

    Args:
        authorization: Raw `Authorization` header value.
        api_key_header: Raw `X-Forter-API-Key` header value.

    Returns:
        str | None: Cleaned API key, or None when no usable key is present.
    """

    raw_api_key: str | None = None
    if authorization and authorization.startswith("Bearer "):
        raw_api_key = authorization[len("Bearer "):]
    elif api_key_header:
        raw_api_key = api_key_header

    if raw_api_key is None:
        return None

    cleaned_api_key = _BEARER_PREFIX_PATTERN.sub("", raw_api_key.strip()).strip()
    return cleaned_api_key or None


def security_authenticate_merchant(
    directory: MerchantDirectoryPort,
    authorization: str | None,
    api_key_header: str | None,
    merchant_id_header: str | None,
) -> str:
    """Resolve and cross-check the calling merchant identity.

    Args:
        directory: Merchant directory.
        authorization: Raw `Authorization` header value.
        api_key_header: Raw `X-Forter-API-Key` header value.
        merchant_id_header: Raw `X-Merchant-Id` header value.

    Returns:
        str: Authenticated merchant identifier.

    Raises:
        MerchantAuthenticationError: Raised when the key is missing or unknown, or the merchant header
            is missing, inactive or does not match the key owner.
    """

    api_key = security_extract_api_key(authorization, api_key_header)
    if api_key is None:
        raise MerchantAuthenticationError("Missing API key")

    authenticated_merchant_id = directory.security_resolve_api_key(api_key)
    if authenticated_merchant_id is None:
        logger.info("rejected webhook request with unknown api key")
        raise MerchantAuthenticationError("Invalid API key")

    merchant_id = (merchant_id_header or "").strip()
    if not merchant_id:
        raise MerchantAuthenticationError("Missing X-Merchant-Id header")
    if not directory.security_is_active_merchant(merchant_id):
        raise MerchantAuthenticationError(f"Merchant '{merchant_id}' is not active")
    if merchant_id != authenticated_merchant_id:
        logger.info("rejected webhook request merchant=%s key_owner=%s", merchant_id, authenticated_merchant_id)
        raise MerchantAuthenticationError("X-Merchant-Id does not match the API key owner")

    return merchant_id
