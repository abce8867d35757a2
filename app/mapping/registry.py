"""Provider mapper registry built once at startup and read-only afterwards."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from .interfaces import WebhookMapperPort

logger = logging.getLogger(__name__)


def mapping_normalize_provider_id(provider_id: str) -> str:
    """Normalize provider identifier to its registry key form.

    Args:
        provider_id: Raw provider identifier.

    Returns:
        str: Trimmed lowercase identifier.
    """

    return provider_id.strip().lower()


class MapperRegistry:
    """Frozen lookup table from lowercase provider identifier to mapper.

    Instances are produced by `MapperRegistryBuilder.registry_build` and never
    mutate, so concurrent readers need no coordination.
    """

    def __init__(self, mappers: Mapping[str, WebhookMapperPort]):
        self._mappers: Mapping[str, WebhookMapperPort] = MappingProxyType(dict(mappers))

    def registry_lookup(self, provider_id: str | None) -> WebhookMapperPort | None:
        """Return the mapper registered for one provider identifier.

        Args:
            provider_id: Provider identifier in any letter case.

        Returns:
            WebhookMapperPort | None: Registered mapper, or None when absent.
        """

        if not isinstance(provider_id, str):
            return None
        return self._mappers.get(mapping_normalize_provider_id(provider_id))

    def registry_list_providers(self) -> list[str]:
        """Return registered provider identifiers in registration order.

        Returns:
            list[str]: Provider identifiers.
        """

        return list(self._mappers.keys())

    def __len__(self) -> int:
        return len(self._mappers)


class MapperRegistryBuilder:
    """Startup-time builder collecting provider mappers."""

    def __init__(self) -> None:
        self._mappers: dict[str, WebhookMapperPort] = {}

    def registry_register(self, mapper: WebhookMapperPort) -> MapperRegistryBuilder:
        """Register one mapper under its normalized provider name.

        A later mapper with the same identifier replaces the earlier one and
        keeps the earlier registration position.

        Args:
            mapper: Provider mapper instance.

        Returns:
            MapperRegistryBuilder: This builder for chaining.

        Raises:
            ValueError: Raised when mapper is None or reports a blank provider name.
        """

        if mapper is None:
            raise ValueError("mapper must not be None")

        provider_key = mapping_normalize_provider_id(mapper.mapper_provider_name())
        if not provider_key:
            raise ValueError("mapper provider name must not be blank")

        if provider_key in self._mappers:
            logger.info("replacing registered mapper for provider=%s", provider_key)
        self._mappers[provider_key] = mapper
        return self

    def registry_build(self) -> MapperRegistry:
        """Freeze registered mappers into an immutable registry.

        Returns:
            MapperRegistry: Read-only registry snapshot.
        """

        return MapperRegistry(self._mappers)


def mapping_build_registry(mappers: list[WebhookMapperPort] | tuple[WebhookMapperPort, ...]) -> MapperRegistry:
    """Build a frozen registry from a sequence of mappers.

    Args:
        mappers: Mappers in registration order.

    Returns:
        MapperRegistry: Read-only registry.
    """

    builder = MapperRegistryBuilder()
    for mapper in mappers:
        builder.registry_register(mapper)
    return builder.registry_build()
