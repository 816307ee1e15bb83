"""Field validators for the validation framework.

One function per rule kind:
- formats: required, email, phone, range, regex (and the duplicate no-op)
- reference: cross-table task id references
- custom: named evaluators supplied by collaborators
"""

from data_alchemist.validation.validators.custom import (
    EVALUATOR_REGISTRY,
    get_evaluator,
    register_evaluator,
    validate_custom,
)
from data_alchemist.validation.validators.formats import (
    validate_duplicate,
    validate_email,
    validate_phone,
    validate_range,
    validate_regex,
    validate_required,
)
from data_alchemist.validation.validators.reference import (
    collect_task_ids,
    find_task_table,
    parse_id_list,
    validate_reference,
)

__all__ = [
    "EVALUATOR_REGISTRY",
    "collect_task_ids",
    "find_task_table",
    "get_evaluator",
    "parse_id_list",
    "register_evaluator",
    "validate_custom",
    "validate_duplicate",
    "validate_email",
    "validate_phone",
    "validate_range",
    "validate_regex",
    "validate_reference",
    "validate_required",
]
