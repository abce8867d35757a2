"""Webhook layer package for normalization pipeline orchestration."""

from .interfaces import WebhookPipelineStage, WebhookProcessingResult, WebhookProcessorPort
from .orchestrator import WebhookOrchestrator

__all__ = [
    "WebhookOrchestrator",
    "WebhookPipelineStage",
    "WebhookProcessingResult",
    "WebhookProcessorPort",
]
