"""Cross-table reference validator.

A ``reference`` rule reads a JSON array of task ids from a cell and checks
each id against the ``TaskID`` column of the dataset's tasks table. The
tasks table is found by name: the first table whose name contains "task"
(case-insensitive). If several tables match, the first in dataset order
wins; if none does, every reference is reported as missing.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from data_alchemist.validation.base import Dataset, Row, Table, ValidationError, ValidationRule
from data_alchemist.validation.validators.formats import is_present, make_error

logger = logging.getLogger(__name__)

TASK_TABLE_HINT = "task"
TASK_ID_COLUMN = "TaskID"


def parse_id_list(value: Any) -> list[Any]:
    """Parse a JSON array literal of ids.

    Malformed JSON (nesting too deep included), or JSON that is not an
    array, yields an empty list.
    Flagging a malformed list is left to a ``regex`` rule on the column.

    Examples:
        >>> parse_id_list('["T1", "T2"]')
        ['T1', 'T2']
        >>> parse_id_list("T1, T2")
        []
    """
    try:
        parsed = json.loads(str(value))
    except (ValueError, RecursionError):
        return []
    return parsed if isinstance(parsed, list) else []


def find_task_table(dataset: Dataset) -> Table | None:
    """Return the first table whose name contains "task", if any."""
    matches = [table for table in dataset.values() if TASK_TABLE_HINT in table.name.lower()]
    if len(matches) > 1:
        names = ", ".join(t.name for t in matches)
        logger.warning(f"Several tables look like task tables ({names}); using {matches[0].name}")
    return matches[0] if matches else None


def collect_task_ids(dataset: Dataset) -> list[Any]:
    """Collect the non-empty TaskID values of the dataset's tasks table."""
    table = find_task_table(dataset)
    if table is None:
        return []
    return [row.get(TASK_ID_COLUMN) for row in table.rows if is_present(row.get(TASK_ID_COLUMN))]


def _hashable(item: Any) -> bool:
    try:
        hash(item)
    except TypeError:
        return False
    return True


def validate_reference(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when any referenced id is missing from the tasks table.

    One error lists every missing id, in the order referenced, duplicates
    included. Skipped when the value is absent or no dataset was given.
    """
    if not is_present(value) or dataset is None:
        return None

    referenced = parse_id_list(value)
    if not referenced:
        return None

    task_ids = collect_task_ids(dataset)
    valid = {task_id for task_id in task_ids if _hashable(task_id)}
    missing = [ref for ref in referenced if not (_hashable(ref) and ref in valid)]
    if not missing:
        return None

    return make_error(rule, row_index, f"{rule.message}: {', '.join(str(ref) for ref in missing)}")
