"""Visibility Predicates — `show_when` rules as a small tagged union.

Authoring forms accepted by parse_show_when():

    {field: goal, value: loss}              → FieldEquals
    {field: goal, value: [loss, gain]}      → FieldIn
    [{field: mode, value: advanced}, ...]   → AllOf

Invariants:
    - is_visible() is total: a missing field makes its condition false, never raises
    - Booleans compare as booleans, numbers numerically, everything else as strings
    - referenced_fields() lists every field a predicate reads (used for load-time checks)

Design Decisions:
    - Evaluators ignore visibility entirely; only the catalog service and the UI consume it
"""

from dataclasses import dataclass
from typing import Any, Mapping, Union

Scalar = Union[str, int, float, bool]


@dataclass(frozen=True)
class FieldEquals:
    field: str
    value: Scalar


@dataclass(frozen=True)
class FieldIn:
    field: str
    values: tuple[Scalar, ...]


@dataclass(frozen=True)
class AllOf:
    conditions: tuple["Predicate", ...]


Predicate = Union[FieldEquals, FieldIn, AllOf]


def _parse_condition(raw: Any) -> Predicate:
    if not isinstance(raw, Mapping) or "field" not in raw or "value" not in raw:
        raise ValueError(f"show_when condition needs 'field' and 'value': {raw!r}")
    field_id = raw["field"]
    if not isinstance(field_id, str) or not field_id:
        raise ValueError(f"show_when field must be a non-empty string: {field_id!r}")
    value = raw["value"]
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValueError(f"show_when on '{field_id}' has an empty value list")
        return FieldIn(field_id, tuple(value))
    return FieldEquals(field_id, value)


def parse_show_when(raw: Any) -> Predicate | None:
    """Parse the authored form; None means always visible."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        if not raw:
            return None
        conditions = tuple(_parse_condition(item) for item in raw)
        return conditions[0] if len(conditions) == 1 else AllOf(conditions)
    return _parse_condition(raw)


def _matches(actual: Any, expected: Scalar) -> bool:
    if actual is None:
        return False
    if isinstance(expected, bool) or isinstance(actual, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual is expected
    if isinstance(expected, (int, float)):
        try:
            return float(actual) == float(expected)
        except (TypeError, ValueError):
            return False
    return str(actual) == str(expected)


def is_visible(predicate: Predicate | None, values: Mapping[str, Any]) -> bool:
    """Evaluate a predicate against resolved input values."""
    if predicate is None:
        return True
    if isinstance(predicate, FieldEquals):
        return _matches(values.get(predicate.field), predicate.value)
    if isinstance(predicate, FieldIn):
        actual = values.get(predicate.field)
        return any(_matches(actual, option) for option in predicate.values)
    return all(is_visible(condition, values) for condition in predicate.conditions)


def referenced_fields(predicate: Predicate | None) -> set[str]:
    if predicate is None:
        return set()
    if isinstance(predicate, (FieldEquals, FieldIn)):
        return {predicate.field}
    fields: set[str] = set()
    for condition in predicate.conditions:
        fields |= referenced_fields(condition)
    return fields
