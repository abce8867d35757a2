"""Mapping layer package for provider mappers, registry and expression engine."""

from .engine import JsonataMappingEngine
from .interfaces import (
	MappingEnginePort,
	PayloadPreProcessorPort,
	PayloadValidationResult,
	ResultPostProcessorPort,
	WebhookMapperPort,
)
from .registry import MapperRegistry, MapperRegistryBuilder, mapping_build_registry, mapping_normalize_provider_id

__all__ = [
	"JsonataMappingEngine",
	"MapperRegistry",
	"MapperRegistryBuilder",
	"MappingEnginePort",
	"PayloadPreProcessorPort",
	"PayloadValidationResult",
	"ResultPostProcessorPort",
	"WebhookMapperPort",
	"mapping_build_registry",
	"mapping_normalize_provider_id",
]
