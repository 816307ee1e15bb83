"""Base data structures for the validation framework.

This module provides the rule definitions, the per-kind rule configs and
the error record shared by all validators, plus the in-memory table types
the engine operates on.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity levels for validation findings."""

    ERROR = "error"  # Blocking data-quality issue
    WARNING = "warning"  # Advisory data-quality issue


class RuleKind(str, Enum):
    """Kinds of validation rules, one validator per kind."""

    REQUIRED = "required"
    EMAIL = "email"
    PHONE = "phone"
    DUPLICATE = "duplicate"
    RANGE = "range"
    REGEX = "regex"
    REFERENCE = "reference"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RangeConfig:
    """Inclusive numeric bounds for a ``range`` rule."""

    min: float
    max: float


@dataclass(frozen=True)
class RegexConfig:
    """Compiled pattern for a ``regex`` rule."""

    pattern: re.Pattern[str]

    @classmethod
    def of(cls, pattern: str) -> RegexConfig:
        """Compile a pattern string into a config."""
        return cls(pattern=re.compile(pattern))


@dataclass(frozen=True)
class CustomConfig:
    """Named evaluator (see ``register_evaluator``) for a ``custom`` rule."""

    evaluator: str
    options: dict[str, Any] = field(default_factory=dict)


RuleConfig = RangeConfig | RegexConfig | CustomConfig

# Config type each kind requires; kinds missing here take no config
CONFIG_TYPES: dict[RuleKind, type] = {
    RuleKind.RANGE: RangeConfig,
    RuleKind.REGEX: RegexConfig,
    RuleKind.CUSTOM: CustomConfig,
}


@dataclass(frozen=True)
class ValidationRule:
    """A declarative validation check.

    Attributes:
        id: Rule identifier, reported on every error it produces
        name: Human-readable rule name
        kind: Which validator evaluates this rule
        field: Column name the rule reads from each row
        message: Message used for errors raised by this rule
        severity: Severity of errors raised by this rule
        config: Kind-specific parameters (None for kinds without any)
    """

    id: str
    name: str
    kind: RuleKind
    field: str
    message: str
    severity: Severity
    config: RuleConfig | None = None

    def __post_init__(self) -> None:
        """Check that the config matches the rule kind."""
        expected = CONFIG_TYPES.get(self.kind)
        if expected is None:
            if self.config is not None:
                raise ValueError(f"Rule {self.id}: {self.kind.value} rules take no config")
        elif self.config is None:
            # Custom rules without an evaluator are allowed and do nothing
            if self.kind is not RuleKind.CUSTOM:
                raise ValueError(f"Rule {self.id}: {self.kind.value} rules require {expected.__name__}")
        elif not isinstance(self.config, expected):
            raise ValueError(
                f"Rule {self.id}: {self.kind.value} rules require {expected.__name__}, "
                f"got {type(self.config).__name__}"
            )


@dataclass(frozen=True)
class ValidationError:
    """A single validation finding, addressed by row and column.

    Attributes:
        row: Zero-based row index within its table
        column: Column name the finding applies to
        message: Human-readable description
        severity: How serious the finding is
        rule_id: Id of the rule that produced it
    """

    row: int
    column: str
    message: str
    severity: Severity
    rule_id: str

    def __str__(self) -> str:
        """Format error for display (rows shown 1-based)."""
        sev = self.severity.value.upper()
        return f"[{sev}] row {self.row + 1} [{self.rule_id}] {self.column}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report's error record shape."""
        return {
            "row": self.row,
            "column": self.column,
            "message": self.message,
            "severity": self.severity.value,
            "ruleId": self.rule_id,
        }


class UnknownEvaluatorError(ValueError):
    """A custom rule names an evaluator that was never registered."""


Row = Mapping[str, Any]


@dataclass
class Table:
    """One uploaded table: its name, declared headers and rows.

    Rows may omit declared headers or carry extra keys; nothing here
    enforces a row shape.
    """

    name: str
    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


# All currently loaded tables, keyed by table name
Dataset = Mapping[str, Table]
