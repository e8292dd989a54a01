"""Evaluation Value Objects — the request an evaluator reads and the result it returns.

Invariants:
    - EvaluationRequest accessors never raise: unusable input comes back as None/default
    - EvaluationResult.invalid() is the single "not enough input yet" sentinel:
      empty values, empty formatted, empty summary, empty metadata, is_valid=False
    - values hold canonical, unrounded numbers; formatted holds display strings
    - Evaluators are total: overflowing input yields invalid(), never an exception

Design Decisions:
    - Frozen dataclasses: built once per HTTP request and discarded afterwards
    - Unit normalization lives on the request so every evaluator converts the same way
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from calcdeck.core.domain_types import Locale, FALLBACK_LOCALE
from calcdeck.core.errors import UnknownUnitError
from calcdeck.core.locale_text import LocaleText
from calcdeck.core.unit_conversion import convert_dual_to_base, convert_to_base, is_dual_unit


def to_number(raw: Any) -> float | None:
    """Coerce a raw input to a finite float; None for anything unusable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        try:
            number = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def all_finite(*numbers: float | None) -> bool:
    """True when no computed number overflowed to inf or collapsed to NaN; None is skipped."""
    return all(number is None or math.isfinite(number) for number in numbers)


@dataclass(frozen=True)
class EvaluationRequest:
    values: Mapping[str, Any] = field(default_factory=dict)
    units: Mapping[str, str] = field(default_factory=dict)
    text: LocaleText = field(default_factory=LocaleText.empty)
    locale: Locale = FALLBACK_LOCALE

    def number(self, field_id: str, default: float | None = None) -> float | None:
        value = to_number(self.values.get(field_id))
        return default if value is None else value

    def choice(self, field_id: str, default: str) -> str:
        raw = self.values.get(field_id)
        if raw is None or isinstance(raw, bool) or raw == "":
            return default
        return str(raw)

    def flag(self, field_id: str) -> bool:
        raw = self.values.get(field_id)
        if isinstance(raw, str):
            return raw.strip().lower() in ("true", "1", "yes", "on")
        return raw is True

    def unit(self, field_id: str, default: str) -> str:
        return self.units.get(field_id) or default

    def number_in_base(
        self, field_id: str, unit_type: str, default_unit: str,
    ) -> float | None:
        """Read a field and convert it to the unit group's base unit."""
        raw = self.values.get(field_id)
        unit_id = self.unit(field_id, default_unit)
        try:
            if isinstance(raw, Mapping) and is_dual_unit(unit_id, unit_type):
                return convert_dual_to_base(raw, unit_id, unit_type)
            number = to_number(raw)
            if number is None:
                return None
            return convert_to_base(number, unit_id, unit_type)
        except (UnknownUnitError, TypeError, ValueError, OverflowError):
            return None


@dataclass(frozen=True)
class EvaluationResult:
    values: dict[str, float | None] = field(default_factory=dict)
    formatted: dict[str, str] = field(default_factory=dict)
    summary: str = ""
    is_valid: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def invalid(cls) -> "EvaluationResult":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": dict(self.values),
            "formatted": dict(self.formatted),
            "summary": self.summary,
            "isValid": self.is_valid,
            "metadata": dict(self.metadata),
        }


Evaluator = Callable[[EvaluationRequest], EvaluationResult]
