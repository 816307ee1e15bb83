"""Named evaluators for ``custom`` rules.

Collaborators register evaluation logic under a name, and a custom rule
refers to it through ``CustomConfig(evaluator=name, options=...)``. An
evaluator receives the same arguments as the built-in validators plus the
rule's options.

Example:
    def blocked_values(value, rule, row_index, row, dataset, options):
        if value in options.get("blocked", []):
            return make_error(rule, row_index)
        return None

    register_evaluator("blocked_values", blocked_values)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from data_alchemist.validation.base import (
    CustomConfig,
    Dataset,
    Row,
    UnknownEvaluatorError,
    ValidationError,
    ValidationRule,
)

logger = logging.getLogger(__name__)

CustomEvaluator = Callable[
    [Any, ValidationRule, int, Row, "Dataset | None", dict[str, Any]],
    "ValidationError | None",
]

# Registry of evaluator names to functions
EVALUATOR_REGISTRY: dict[str, CustomEvaluator] = {}


def register_evaluator(name: str, evaluator: CustomEvaluator) -> None:
    """Register (or replace) a custom evaluator under ``name``."""
    if name in EVALUATOR_REGISTRY:
        logger.debug(f"Replacing custom evaluator {name}")
    EVALUATOR_REGISTRY[name] = evaluator


def get_evaluator(name: str) -> CustomEvaluator:
    """Look up a custom evaluator by name.

    Raises:
        UnknownEvaluatorError: If no evaluator was registered under ``name``
    """
    if name not in EVALUATOR_REGISTRY:
        raise UnknownEvaluatorError(f"Unknown evaluator: {name}. Available: {sorted(EVALUATOR_REGISTRY)}")
    return EVALUATOR_REGISTRY[name]


def validate_custom(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Run the rule's registered evaluator; rules without one do nothing."""
    config = rule.config
    if config is None:
        return None
    assert isinstance(config, CustomConfig)

    evaluator = get_evaluator(config.evaluator)
    return evaluator(value, rule, row_index, row, dataset, dict(config.options))
