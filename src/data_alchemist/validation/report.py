"""Validation reports built from engine results.

A report wraps the per-table error lists of one validation pass with the
summary figures shown to users (counts and a 0-100 validation score), a
per-rule breakdown and plain-language recommendations. The timestamp lives
here, never on the errors themselves.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path  # noqa: TC003 - Path is used at runtime
from typing import Any

from data_alchemist.validation.base import Dataset, Severity, ValidationError, ValidationRule

logger = logging.getLogger(__name__)

# Errors shown per table unless verbose
PRINT_LIMIT = 10


def validation_score(error_count: int, warning_count: int, total_rows: int) -> float:
    """Score a dataset from 0 (poor) to 100 (clean).

    Each error costs 10 points and each warning 2, scaled by row count.

    Examples:
        >>> validation_score(1, 0, 10)
        90.0
        >>> validation_score(0, 0, 0)
        100.0
    """
    if total_rows <= 0:
        return 100.0
    return max(0.0, 100 - (error_count * 10 + warning_count * 2) / total_rows * 100)


def round_score(score: float) -> int:
    """Round half up, the way the score is displayed."""
    return math.floor(score + 0.5)


@dataclass
class ValidationReport:
    """Aggregated validation results for a dataset.

    Attributes:
        results: Ordered error list per table name
        row_counts: Number of rows per table name
        rules: Rules that were active, for naming rules in the breakdown
    """

    results: dict[str, list[ValidationError]] = field(default_factory=dict)
    row_counts: dict[str, int] = field(default_factory=dict)
    rules: list[ValidationRule] = field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        results: dict[str, list[ValidationError]],
        dataset: Dataset,
        rules: Iterable[ValidationRule] = (),
    ) -> ValidationReport:
        """Build a report from ``validate_dataset`` output."""
        return cls(
            results=dict(results),
            row_counts={name: len(table.rows) for name, table in dataset.items()},
            rules=list(rules),
        )

    @property
    def errors(self) -> list[tuple[str, ValidationError]]:
        """All findings as (table name, error) pairs, in table order."""
        return [(name, error) for name, errors in self.results.items() for error in errors]

    @property
    def total_files(self) -> int:
        return len(self.row_counts)

    @property
    def total_rows(self) -> int:
        return sum(self.row_counts.values())

    @property
    def error_count(self) -> int:
        """Count of ERROR severity findings."""
        return sum(1 for _, e in self.errors if e.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of WARNING severity findings."""
        return sum(1 for _, e in self.errors if e.severity == Severity.WARNING)

    @property
    def score(self) -> float:
        return validation_score(self.error_count, self.warning_count, self.total_rows)

    def get_errors_by_severity(self, severity: Severity) -> list[tuple[str, ValidationError]]:
        """Get all findings of a specific severity."""
        return [(name, e) for name, e in self.errors if e.severity == severity]

    def get_errors_for_row(self, table: str, row: int) -> list[ValidationError]:
        """Get all findings for a specific row (0-based) of a table."""
        return [e for e in self.results.get(table, []) if e.row == row]

    def rule_breakdown(self) -> list[dict[str, Any]]:
        """Count findings per rule id, in order of first appearance."""
        rules_by_id: dict[str, ValidationRule] = {}
        for rule in self.rules:
            rules_by_id.setdefault(rule.id, rule)

        counts: dict[str, int] = {}
        for _, error in self.errors:
            counts[error.rule_id] = counts.get(error.rule_id, 0) + 1

        breakdown = []
        for rule_id, count in counts.items():
            rule = rules_by_id.get(rule_id)
            breakdown.append(
                {
                    "ruleId": rule_id,
                    "ruleName": rule.name if rule else "Unknown Rule",
                    "ruleType": rule.kind.value if rule else "unknown",
                    "count": count,
                    "severity": rule.severity.value if rule else Severity.ERROR.value,
                }
            )
        return breakdown

    def recommendations(self) -> list[str]:
        """Plain-language next steps based on the summary figures."""
        recommendations = []
        if self.error_count > 0:
            recommendations.append("Fix all errors before proceeding with data processing")
        if self.warning_count > 10:
            recommendations.append("Review warnings to improve data quality")
        if self.score < 80:
            recommendations.append("Consider data cleanup before using this dataset")
        return recommendations

    def to_dict(self, timestamp: datetime | None = None) -> dict[str, Any]:
        """Serialize to the exported report shape.

        Args:
            timestamp: Report time; defaults to now (UTC)
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        return {
            "summary": {
                "totalFiles": self.total_files,
                "totalRows": self.total_rows,
                "totalErrors": self.error_count,
                "totalWarnings": self.warning_count,
                "validationScore": round_score(self.score),
                "timestamp": timestamp.isoformat(),
            },
            "ruleBreakdown": self.rule_breakdown(),
            "detailedErrors": [{**error.to_dict(), "fileName": name} for name, error in self.errors],
            "recommendations": self.recommendations(),
        }


def print_validation_report(report: ValidationReport, verbose: bool = False) -> None:
    """Print human-readable validation report.

    Args:
        report: ValidationReport to print
        verbose: If True, list every finding instead of the first few per table
    """
    print("\nVALIDATION REPORT")
    print("=" * 60)
    print(f"Tables checked:   {', '.join(report.row_counts)}")
    print(f"Rows checked:     {report.total_rows}")
    print(f"Errors:           {report.error_count}")
    print(f"Warnings:         {report.warning_count}")
    print(f"Validation score: {round_score(report.score)}%")
    print()

    for severity, title in ((Severity.ERROR, "ERRORS"), (Severity.WARNING, "WARNINGS")):
        findings = report.get_errors_by_severity(severity)
        if not findings:
            continue
        print(f"{title} ({len(findings)}):")
        shown: dict[str, int] = {}
        for name, error in findings:
            shown[name] = shown.get(name, 0) + 1
            if not verbose and shown[name] > PRINT_LIMIT:
                continue
            print(f"  {name}: {error}")
        if not verbose:
            for name, count in shown.items():
                if count > PRINT_LIMIT:
                    print(f"  {name}: ... {count - PRINT_LIMIT} more (use --verbose)")
        print()

    breakdown = report.rule_breakdown()
    if breakdown:
        print("Summary by rule:")
        for entry in breakdown:
            print(f"  {entry['ruleId']}: {entry['count']}")

    for recommendation in report.recommendations():
        print(f"-> {recommendation}")


def export_validation_report(report: ValidationReport, path: Path) -> None:
    """Export validation report to JSON file.

    Args:
        report: ValidationReport to export
        path: Output file path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)

    logger.info(f"Exported validation report to {path}")
