"""JSONata-backed mapping expression engine."""

from __future__ import annotations

import logging
from typing import Any

import jsonata

from app.domain import MappingExecutionError

from .interfaces import MappingEnginePort

logger = logging.getLogger(__name__)

EMPTY_RESULT_MESSAGE = (
    "Mapping expression returned undefined or null. Check if the expression matches the payload structure."
)


class JsonataMappingEngine(MappingEnginePort):
    """Pure interpreter over (expression, payload) using the JSONata dialect.

    Every call compiles its own expression instance, so no interpreter state
    is shared between concurrent evaluations.
    """

    def mapping_engine_name(self) -> str:
        """Return expression dialect identifier.

        Returns:
            str: Dialect label.
        """

        return "jsonata"

    def mapping_evaluate(self, expression: str, payload: Any) -> Any:
        """Compile and evaluate one JSONata expression against a payload.

        Args:
            expression: JSONata expression text.
            payload: JSON-compatible input document.

        Returns:
            Any: Non-null evaluation result.

        Raises:
            MappingExecutionError: Raised on compile failure, evaluation failure or empty result.
        """

        if not isinstance(expression, str) or not expression.strip():
            raise MappingExecutionError("Failed to compile JSONata expression: expression must not be blank")

        try:
            compiled_expression = jsonata.Jsonata(expression)
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise MappingExecutionError(f"Failed to compile JSONata expression: {error}") from error

        try:
            result = compiled_expression.evaluate(payload)
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise MappingExecutionError(f"Failed to evaluate JSONata expression: {error}") from error

        if result is None:
            logger.debug("mapping expression produced empty result")
            raise MappingExecutionError(EMPTY_RESULT_MESSAGE)

        return result
