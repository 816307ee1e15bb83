"""Single-value validators: required, email, phone, range and regex.

Each validator takes ``(value, rule, row_index, row, dataset)`` and returns
a ValidationError or None. Values that are absent pass every check here
except ``required``; enforcing presence is that rule's job.
"""

from __future__ import annotations

import math
import re
from typing import Any

from data_alchemist.validation.base import (
    Dataset,
    RangeConfig,
    RegexConfig,
    Row,
    ValidationError,
    ValidationRule,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
PHONE_SEPARATORS = re.compile(r"[-\s()]")

# Leading numeric prefix, the way spreadsheet hosts read "12.5kg" as 12.5; ASCII digits only
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)", re.ASCII)


def make_error(rule: ValidationRule, row_index: int, message: str | None = None) -> ValidationError:
    """Build an error for ``rule`` at ``row_index``."""
    return ValidationError(
        row=row_index,
        column=rule.field,
        message=rule.message if message is None else message,
        severity=rule.severity,
        rule_id=rule.id,
    )


def is_present(value: Any) -> bool:
    """Return True for values a spreadsheet user would consider filled in."""
    return bool(value)


def parse_float(value: Any) -> float | None:
    """Parse a number from a cell value.

    Numbers pass through; strings are read by their leading numeric prefix.
    Returns None for anything without one (including booleans and NaN).
    Integers too large for a float read as signed infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return None
        number = float(match.group(1).replace("Infinity", "inf"))
    return None if math.isnan(number) else number


def format_number(number: float) -> str:
    """Format a bound for messages: ``0`` rather than ``0.0``."""
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return str(number)


def validate_required(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when the value is missing or blank."""
    if value is None or str(value).strip() == "":
        return make_error(rule, row_index)
    return None


def validate_email(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when a present value is not shaped like local@domain.tld."""
    if is_present(value) and not EMAIL_PATTERN.fullmatch(str(value)):
        return make_error(rule, row_index)
    return None


def validate_phone(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when a present value is not an (optionally +prefixed) number of up to 16 digits."""
    if not is_present(value):
        return None
    digits = PHONE_SEPARATORS.sub("", str(value))
    if not PHONE_PATTERN.fullmatch(digits):
        return make_error(rule, row_index)
    return None


def validate_range(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when a numeric value falls outside the configured bounds.

    Values that do not parse as numbers are skipped.
    """
    config = rule.config
    assert isinstance(config, RangeConfig)

    number = parse_float(value)
    if number is None:
        return None
    if config.min <= number <= config.max:
        return None
    bounds = f"{format_number(config.min)}-{format_number(config.max)}"
    return make_error(rule, row_index, f"{rule.message} ({bounds})")


def validate_regex(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Fail when a present value does not match the configured pattern."""
    config = rule.config
    assert isinstance(config, RegexConfig)

    if is_present(value) and not config.pattern.search(str(value)):
        return make_error(rule, row_index)
    return None


def validate_duplicate(
    value: Any, rule: ValidationRule, row_index: int, row: Row, dataset: Dataset | None = None
) -> ValidationError | None:
    """Duplicates need the whole table; the engine groups them after the row pass."""
    return None
