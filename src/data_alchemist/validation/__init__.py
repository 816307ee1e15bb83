"""Tabular data validation framework.

This package validates uploaded tables (clients, workers, tasks) against a
registry of declarative rules and reports per-cell findings, including
duplicate keys within a table and task references across tables.

Main entry points:
    - ValidationEngine: Rule registry plus the validation pass
    - validate_table(): Validate a single table with the default rules
    - validate_dataset(): Validate every loaded table
    - ValidationReport: Summary, score and JSON export of a pass

Example:
    from data_alchemist.validation import (
        ValidationReport,
        list_rules,
        print_validation_report,
        validate_dataset,
    )

    results = validate_dataset(dataset)
    report = ValidationReport.from_results(results, dataset, list_rules())
    print_validation_report(report)
"""

from data_alchemist.validation.base import (
    CustomConfig,
    Dataset,
    RangeConfig,
    RegexConfig,
    RuleKind,
    Severity,
    Table,
    UnknownEvaluatorError,
    ValidationError,
    ValidationRule,
)
from data_alchemist.validation.engine import (
    DEFAULT_ENGINE,
    ValidationEngine,
    add_custom_rule,
    list_rules,
    validate_dataset,
    validate_table,
)
from data_alchemist.validation.report import (
    ValidationReport,
    export_validation_report,
    print_validation_report,
    validation_score,
)
from data_alchemist.validation.rules import (
    DEFAULT_RULES,
    RuleRegistry,
    export_rules,
    load_rules,
    rule_from_dict,
    rule_to_dict,
)
from data_alchemist.validation.validators import register_evaluator

__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_RULES",
    "CustomConfig",
    "Dataset",
    "RangeConfig",
    "RegexConfig",
    "RuleKind",
    "RuleRegistry",
    "Severity",
    "Table",
    "UnknownEvaluatorError",
    "ValidationEngine",
    "ValidationError",
    "ValidationReport",
    "ValidationRule",
    "add_custom_rule",
    "export_rules",
    "export_validation_report",
    "list_rules",
    "load_rules",
    "print_validation_report",
    "register_evaluator",
    "rule_from_dict",
    "rule_to_dict",
    "validate_dataset",
    "validate_table",
    "validation_score",
]
