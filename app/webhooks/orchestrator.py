"""Webhook normalization orchestrator with deterministic stage timeline."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.domain import (
    STAGE_STATUS_COMPLETED,
    STAGE_STATUS_FAILED,
    STAGE_STATUS_SKIPPED,
    CanonicalChargebackRecord,
    EventTypeNotFoundError,
    MappingExpressionNotFoundError,
    PayloadValidationError,
    ProviderNotFoundError,
    UnclassifiedWebhookError,
    WebhookError,
    domain_build_stage_event,
)
from app.mapping import (
    MapperRegistry,
    MappingEnginePort,
    PayloadPreProcessorPort,
    ResultPostProcessorPort,
)

from .interfaces import WebhookPipelineStage, WebhookProcessingResult, WebhookProcessorPort

logger = logging.getLogger(__name__)

UNKNOWN_EVENT_TYPE = "unknown"


class WebhookOrchestrator(WebhookProcessorPort):
    """Runs the linear normalization pipeline for one webhook payload.

    Stages run in `WebhookPipelineStage` order. The first failing stage raises
    its taxonomy error and halts the run; nothing is retried and no partial
    result is returned. Registry and engine are read-only, so one instance
    serves concurrent requests.
    """

    def __init__(self, registry: MapperRegistry, mapping_engine: MappingEnginePort):
        """Initialize orchestrator dependencies.

        Args:
            registry: Frozen provider mapper registry.
            mapping_engine: Expression engine used by the evaluate stage.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are missing.
        """

        if registry is None:
            raise ValueError("registry must not be None")
        if mapping_engine is None:
            raise ValueError("mapping_engine must not be None")

        self._registry = registry
        self._mapping_engine = mapping_engine

    def webhook_supported_providers(self) -> list[str]:
        return self._registry.registry_list_providers()

    def webhook_process(self, payload: Any, provider_id: str) -> WebhookProcessingResult:
        """Normalize one webhook payload into a canonical chargeback record.

        Args:
            payload: Raw provider webhook payload.
            provider_id: Provider identifier in any letter case.

        Returns:
            WebhookProcessingResult: Canonical record and stage timeline.

        Raises:
            ProviderNotFoundError: Raised when no mapper is registered for the provider.
            PayloadValidationError: Raised when structural validation fails.
            EventTypeNotFoundError: Raised when event type is absent or unsupported.
            MappingExpressionNotFoundError: Raised when no expression exists for the event type.
            MappingExecutionError: Raised when expression compile, evaluation or post-processing fails.
            UnclassifiedWebhookError: Raised for any other collaborator failure.
        """

        timeline: list[dict[str, object]] = []
        stage = WebhookPipelineStage.LOOKUP_PROVIDER
        try:
            mapper = self._registry.registry_lookup(provider_id)
            if mapper is None:
                raise ProviderNotFoundError(str(provider_id))
            provider_name = mapper.mapper_provider_name()
            self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED, {"provider": provider_name})

            stage = WebhookPipelineStage.VALIDATE_PAYLOAD
            validation_result = mapper.mapper_validate_payload(payload)
            if not validation_result.valid:
                raise PayloadValidationError(
                    validation_result.error or "Invalid payload structure",
                    field=validation_result.field,
                )
            self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED)

            stage = WebhookPipelineStage.PRE_PROCESS
            if isinstance(mapper, PayloadPreProcessorPort):
                working_payload = mapper.mapper_pre_process_payload(payload)
                self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED)
            else:
                working_payload = payload
                self._webhook_record_stage(timeline, stage, STAGE_STATUS_SKIPPED)

            stage = WebhookPipelineStage.EXTRACT_EVENT_TYPE
            event_type = mapper.mapper_extract_event_type(working_payload)
            if not event_type:
                raise EventTypeNotFoundError(UNKNOWN_EVENT_TYPE, provider_name, mapper.mapper_supported_event_types())
            self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED, {"event_type": event_type})

            stage = WebhookPipelineStage.VERIFY_EVENT_TYPE
            if not mapper.mapper_verify_event_type(event_type):
                raise EventTypeNotFoundError(event_type, provider_name, mapper.mapper_supported_event_types())
            self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED)

            stage = WebhookPipelineStage.RESOLVE_EXPRESSION
            expression = mapper.mapper_get_mapping_expression(event_type)
            if not expression:
                raise MappingExpressionNotFoundError(event_type, provider_name)
            self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED)

            stage = WebhookPipelineStage.EVALUATE
            mapped_result = self._mapping_engine.mapping_evaluate(expression, working_payload)
            self._webhook_record_stage(
                timeline,
                stage,
                STAGE_STATUS_COMPLETED,
                {"engine": self._mapping_engine.mapping_engine_name()},
            )

            stage = WebhookPipelineStage.POST_PROCESS
            if isinstance(mapper, ResultPostProcessorPort):
                record = _webhook_record_payload(mapper.mapper_post_process_result(mapped_result))
                self._webhook_record_stage(timeline, stage, STAGE_STATUS_COMPLETED)
            else:
                record = mapped_result
                self._webhook_record_stage(timeline, stage, STAGE_STATUS_SKIPPED)
        except WebhookError as error:
            self._webhook_record_failure(timeline, stage, error)
            logger.warning(
                "webhook pipeline failed stage=%s provider=%s error=%s message=%s",
                stage.value,
                provider_id,
                error.error_name.value,
                error.message,
            )
            raise
        except Exception as error:  # pylint: disable=broad-exception-caught
            unclassified_error = UnclassifiedWebhookError(str(error) or None)
            self._webhook_record_failure(timeline, stage, unclassified_error)
            logger.exception("webhook pipeline crashed stage=%s provider=%s", stage.value, provider_id)
            raise unclassified_error from error

        logger.info("webhook normalized provider=%s event_type=%s", provider_name, event_type)
        return WebhookProcessingResult(
            provider=provider_name,
            event_type=event_type,
            record=record,
            timeline=tuple(timeline),
        )

    def _webhook_record_stage(
        self,
        timeline: list[dict[str, object]],
        stage: WebhookPipelineStage,
        status: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        timeline.append(domain_build_stage_event(stage=stage.value, status=status, details=details))
        logger.debug("webhook stage=%s status=%s", stage.value, status)

    def _webhook_record_failure(
        self,
        timeline: list[dict[str, object]],
        stage: WebhookPipelineStage,
        error: WebhookError,
    ) -> None:
        self._webhook_record_stage(
            timeline,
            stage,
            STAGE_STATUS_FAILED,
            {"error_name": error.error_name.value, "message": error.message},
        )


def _webhook_record_payload(record: Any) -> Any:
    """Convert post-processed output to a JSON-compatible record payload.

    Args:
        record: Post-processing output.

    Returns:
        Any: Record payload dict, or the value unchanged when it is neither a record nor a mapping.
    """

    if isinstance(record, CanonicalChargebackRecord):
        return record.to_payload()
    if isinstance(record, Mapping):
        return dict(record)
    return record
