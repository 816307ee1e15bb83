"""Rule registry and the built-in default ruleset.

Rules are not scoped to a table: every rule runs against every table's
rows and is matched only by column name. A rule whose field is absent
from a table simply reads ``None`` for every row.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from pathlib import Path  # noqa: TC003 - Path is used at runtime
from typing import Any

from data_alchemist.validation.base import (
    CustomConfig,
    RangeConfig,
    RegexConfig,
    RuleKind,
    Severity,
    ValidationRule,
)

logger = logging.getLogger(__name__)

RULES_FORMAT_VERSION = "1.0"

DEFAULT_RULES: tuple[ValidationRule, ...] = (
    ValidationRule(
        id="req-client-name",
        name="Required Client Name",
        kind=RuleKind.REQUIRED,
        field="Name",
        message="Client name is required",
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="email-format",
        name="Email Format",
        kind=RuleKind.EMAIL,
        field="Email",
        message="Invalid email format",
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="phone-format",
        name="Phone Format",
        kind=RuleKind.PHONE,
        field="PhoneNumber",
        message="Invalid phone number format",
        severity=Severity.WARNING,
    ),
    ValidationRule(
        id="duplicate-ids",
        name="Duplicate IDs",
        kind=RuleKind.DUPLICATE,
        field="ClientID",
        message="Duplicate ID found",
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="worker-load-range",
        name="Worker Load Range",
        kind=RuleKind.RANGE,
        field="CurrentLoad",
        message="Current load exceeds maximum capacity",
        severity=Severity.WARNING,
        config=RangeConfig(min=0, max=100),
    ),
    ValidationRule(
        id="task-reference",
        name="Task References",
        kind=RuleKind.REFERENCE,
        field="TaskIDs",
        message="Referenced task ID not found",
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="hourly-rate-range",
        name="Hourly Rate Range",
        kind=RuleKind.RANGE,
        field="HourlyRate",
        message="Hourly rate seems unusually high/low",
        severity=Severity.WARNING,
        config=RangeConfig(min=15, max=200),
    ),
    ValidationRule(
        id="skill-format",
        name="Skills Format",
        kind=RuleKind.REGEX,
        field="Skills",
        message="Skills must be in JSON array format",
        severity=Severity.ERROR,
        config=RegexConfig.of(r"^\[.*\]\Z"),
    ),
)


class RuleRegistry:
    """Append-only, ordered collection of validation rules.

    Registry order carries no priority: every rule runs independently on
    every row. Ids are not required to be unique; rules sharing an id both
    fire and both report that id.
    """

    def __init__(self, rules: Iterable[ValidationRule] = ()):
        """Initialize with an optional starting ruleset.

        Args:
            rules: Rules to register, in order
        """
        self._rules: list[ValidationRule] = []
        for rule in rules:
            self.add_rule(rule)

    @classmethod
    def with_defaults(cls) -> RuleRegistry:
        """Create a registry seeded with DEFAULT_RULES."""
        return cls(DEFAULT_RULES)

    def add_rule(self, rule: ValidationRule) -> None:
        """Append a rule to the registry."""
        if any(existing.id == rule.id for existing in self._rules):
            logger.debug(f"Rule id {rule.id} already registered; both rules will run")
        self._rules.append(rule)

    def list_rules(self) -> list[ValidationRule]:
        """Return the registered rules in registration order."""
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ValidationRule]:
        return iter(list(self._rules))


def _config_to_dict(rule: ValidationRule) -> dict[str, Any] | None:
    config = rule.config
    if isinstance(config, RangeConfig):
        return {"min": config.min, "max": config.max}
    if isinstance(config, RegexConfig):
        return {"pattern": config.pattern.pattern}
    if isinstance(config, CustomConfig):
        return {"evaluator": config.evaluator, "options": dict(config.options)}
    return None


def _config_from_dict(kind: RuleKind, data: dict[str, Any] | None) -> Any:
    if data is None:
        return None
    try:
        if kind is RuleKind.RANGE:
            return RangeConfig(min=float(data["min"]), max=float(data["max"]))
        if kind is RuleKind.REGEX:
            return RegexConfig.of(str(data["pattern"]))
        if kind is RuleKind.CUSTOM:
            return CustomConfig(evaluator=str(data["evaluator"]), options=dict(data.get("options") or {}))
    except KeyError as e:
        raise ValueError(f"Missing config key {e} for {kind.value} rule") from e
    # Kinds without parameters ignore whatever config was exported with them
    return None


def rule_to_dict(rule: ValidationRule) -> dict[str, Any]:
    """Serialize a rule to its exported JSON shape."""
    return {
        "id": rule.id,
        "name": rule.name,
        "type": rule.kind.value,
        "field": rule.field,
        "message": rule.message,
        "severity": rule.severity.value,
        "config": _config_to_dict(rule),
    }


def rule_from_dict(data: dict[str, Any]) -> ValidationRule:
    """Build a rule from its exported JSON shape.

    Raises:
        ValueError: If a key is missing or type/severity is unknown
    """
    try:
        kind = RuleKind(data["type"])
        severity = Severity(data["severity"])
        return ValidationRule(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            kind=kind,
            field=str(data["field"]),
            message=str(data["message"]),
            severity=severity,
            config=_config_from_dict(kind, data.get("config")),
        )
    except KeyError as e:
        raise ValueError(f"Rule definition missing key {e}: {data}") from e


def export_rules(rules: Iterable[ValidationRule], path: Path) -> None:
    """Export rules to a JSON rules file.

    Args:
        rules: Rules to export, in order
        path: Output file path
    """
    rules = list(rules)
    kinds: list[str] = []
    for rule in rules:
        if rule.kind.value not in kinds:
            kinds.append(rule.kind.value)

    data = {
        "version": RULES_FORMAT_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rules": [rule_to_dict(r) for r in rules],
        "metadata": {
            "totalRules": len(rules),
            "enabledRules": len(rules),
            "ruleTypes": kinds,
        },
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.info(f"Exported {len(rules)} rules to {path}")


def load_rules(path: Path) -> list[ValidationRule]:
    """Load rules from a JSON rules file.

    Accepts the exported shape (``{"rules": [...]}``) or a bare list.

    Raises:
        ValueError: If the file does not hold rule definitions
    """
    with path.open(encoding="utf-8") as f:
        data = json.load(f)

    items = data.get("rules") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"No rule list found in {path}")

    rules = [rule_from_dict(item) for item in items]
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules
