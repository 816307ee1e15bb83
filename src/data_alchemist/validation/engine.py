"""Validation engine for orchestrating table validation.

This module provides the main entry points for validating tables:
- ValidationEngine.validate(): Validate a single table
- ValidationEngine.validate_dataset(): Validate every loaded table
- validate_table(): Validate a table with the default engine

Error order is deterministic: rows in table order, rules in registry order
within each row, then duplicate groups (per duplicate rule, in registry
order) after every per-row error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from data_alchemist.validation.base import (
    Dataset,
    Row,
    RuleKind,
    Table,
    ValidationError,
    ValidationRule,
)
from data_alchemist.validation.rules import RuleRegistry
from data_alchemist.validation.validators import (
    find_task_table,
    validate_custom,
    validate_duplicate,
    validate_email,
    validate_phone,
    validate_range,
    validate_reference,
    validate_regex,
    validate_required,
)
from data_alchemist.validation.validators.formats import is_present

logger = logging.getLogger(__name__)

FieldValidatorFunc = Callable[[Any, ValidationRule, int, Row, "Dataset | None"], "ValidationError | None"]

# Registry of rule kinds to validator functions
FIELD_VALIDATORS: dict[RuleKind, FieldValidatorFunc] = {
    RuleKind.REQUIRED: validate_required,
    RuleKind.EMAIL: validate_email,
    RuleKind.PHONE: validate_phone,
    RuleKind.DUPLICATE: validate_duplicate,
    RuleKind.RANGE: validate_range,
    RuleKind.REGEX: validate_regex,
    RuleKind.REFERENCE: validate_reference,
    RuleKind.CUSTOM: validate_custom,
}

DUPLICATE_MESSAGE = 'Duplicate ID "{value}" found in rows {rows}'


def get_field_validator(kind: RuleKind) -> FieldValidatorFunc:
    """Return the validator function for a rule kind.

    Raises:
        ValueError: If no validator handles ``kind``
    """
    if kind not in FIELD_VALIDATORS:
        raise ValueError(f"No validator for rule kind: {kind}. Available: {[k.value for k in FIELD_VALIDATORS]}")
    return FIELD_VALIDATORS[kind]


def _group_key(value: Any) -> Any:
    """Key for duplicate grouping; unhashable values group by repr.

    Booleans are kept apart from the numbers they compare equal to, so
    ``True`` and ``1`` are different ids. ``1`` and ``1.0`` share a group.
    """
    try:
        hash(value)
    except TypeError:
        return ("repr", repr(value))
    return ("bool" if isinstance(value, bool) else "value", value)


class DuplicateTracker:
    """Groups row indices by value for one ``duplicate`` rule."""

    def __init__(self, rule: ValidationRule):
        self.rule = rule
        # key -> (display value, row indices); insertion order is first appearance
        self.groups: dict[Any, tuple[Any, list[int]]] = {}

    def track(self, value: Any, row_index: int) -> None:
        """Record ``value`` at ``row_index`` if it is non-empty."""
        if not is_present(value):
            return
        key = _group_key(value)
        if key not in self.groups:
            self.groups[key] = (value, [])
        self.groups[key][1].append(row_index)

    def errors(self) -> list[ValidationError]:
        """One error per row of every value seen in two or more rows."""
        errors: list[ValidationError] = []
        for value, rows in self.groups.values():
            if len(rows) < 2:
                continue
            row_numbers = ", ".join(str(r + 1) for r in rows)
            message = DUPLICATE_MESSAGE.format(value=value, rows=row_numbers)
            for row_index in rows:
                errors.append(
                    ValidationError(
                        row=row_index,
                        column=self.rule.field,
                        message=message,
                        severity=self.rule.severity,
                        rule_id=self.rule.id,
                    )
                )
        return errors


class ValidationEngine:
    """Runs a rule registry over in-memory tables.

    The engine keeps no table state: every call recomputes all errors from
    the table, the registry and the dataset snapshot it is given, and never
    mutates any of them.
    """

    def __init__(self, registry: RuleRegistry | None = None):
        """Initialize with a rule registry.

        Args:
            registry: Rules to run. Defaults to the built-in ruleset.
        """
        self.registry = registry if registry is not None else RuleRegistry.with_defaults()

    def list_rules(self) -> list[ValidationRule]:
        """Return the active rules in registry order."""
        return self.registry.list_rules()

    def add_rule(self, rule: ValidationRule) -> None:
        """Append a rule to the registry."""
        self.registry.add_rule(rule)

    def add_custom_rule(self, rule: ValidationRule) -> None:
        """Register a collaborator-defined rule at runtime."""
        logger.debug(f"Adding custom rule {rule.id} ({rule.kind.value} on {rule.field})")
        self.add_rule(rule)

    def validate(self, table: Table, dataset: Dataset | None = None) -> list[ValidationError]:
        """Validate every row of a table against every rule.

        Args:
            table: Table to validate
            dataset: All loaded tables, needed by reference rules. Reference
                rules are skipped when it is None.

        Returns:
            Ordered list of ValidationError objects (empty if valid)

        Raises:
            UnknownEvaluatorError: If a custom rule names an unregistered evaluator
        """
        rules = self.registry.list_rules()
        validators = [(rule, get_field_validator(rule.kind)) for rule in rules]
        trackers = [DuplicateTracker(rule) for rule in rules if rule.kind is RuleKind.DUPLICATE]

        reference_fields = [rule.field for rule in rules if rule.kind is RuleKind.REFERENCE]
        if dataset is not None and reference_fields and find_task_table(dataset) is None:
            if any(is_present(row.get(f)) for row in table.rows for f in reference_fields):
                logger.warning(f"No task table loaded; all task references in {table.name} will be reported missing")

        errors: list[ValidationError] = []
        for row_index, row in enumerate(table.rows):
            for rule, validator in validators:
                error = validator(row.get(rule.field), rule, row_index, row, dataset)
                if error is not None:
                    errors.append(error)
            for tracker in trackers:
                tracker.track(row.get(tracker.rule.field), row_index)

        for tracker in trackers:
            errors.extend(tracker.errors())

        logger.debug(f"Validated {table.name}: {len(table.rows)} rows, {len(rules)} rules, {len(errors)} errors")
        return errors

    def validate_dataset(self, dataset: Dataset) -> dict[str, list[ValidationError]]:
        """Validate every table against one snapshot of the dataset.

        Args:
            dataset: All loaded tables, keyed by name

        Returns:
            Dict mapping table name to its ordered error list, in dataset order
        """
        snapshot = dict(dataset)
        results = {name: self.validate(table, snapshot) for name, table in snapshot.items()}
        total = sum(len(errors) for errors in results.values())
        logger.info(f"Validated {len(snapshot)} tables: {total} findings")
        return results


DEFAULT_ENGINE = ValidationEngine()


def validate_table(table: Table, dataset: Dataset | None = None) -> list[ValidationError]:
    """Validate a table with the default engine."""
    return DEFAULT_ENGINE.validate(table, dataset)


def validate_dataset(dataset: Dataset) -> dict[str, list[ValidationError]]:
    """Validate every table in a dataset with the default engine."""
    return DEFAULT_ENGINE.validate_dataset(dataset)


def list_rules() -> list[ValidationRule]:
    """Return the default engine's rules."""
    return DEFAULT_ENGINE.list_rules()


def add_custom_rule(rule: ValidationRule) -> None:
    """Register a rule with the default engine."""
    DEFAULT_ENGINE.add_custom_rule(rule)
