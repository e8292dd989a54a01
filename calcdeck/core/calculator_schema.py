"""Calculator Schema — immutable, validated calculator definitions.

Invariants:
    - Definitions are frozen after validation; nothing mutates them at runtime
    - Input and result ids are unique within a definition
    - An input's show_when only references inputs declared before it (no forward refs, no cycles)
    - A result's show_when only references declared inputs
    - Unit metadata is consistent with the unit registry
    - Numeric defaults sit inside min/max; choice defaults are one of the options
    - A malformed definition raises CalculatorConfigError at load time, never at render time

Design Decisions:
    - Pydantic over hand-rolled dict checks: YAML maps straight onto the models
    - show_when kept in authored form and parsed on demand (core/visibility.py owns the union)
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from calcdeck.core.domain_types import (
    ChartType, InputType, Locale, ResultFormat, ResultType, FALLBACK_LOCALE,
)
from calcdeck.core.errors import CalculatorConfigError
from calcdeck.core.evaluation import to_number
from calcdeck.core.unit_registry import get_unit_group
from calcdeck.core.visibility import Predicate, parse_show_when, referenced_fields

_CHOICE_TYPES = (InputType.SELECT, InputType.RADIO)
_NUMERIC_TYPES = (InputType.NUMBER, InputType.SLIDER)
_FROZEN = ConfigDict(frozen=True, extra="forbid")


class InputDefinition(BaseModel):
    """One user-entered field."""
    model_config = _FROZEN

    id: str = Field(pattern=r"^[a-zA-Z][a-zA-Z0-9]*$")
    type: InputType
    default: Any = None
    required: bool = False
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: tuple[str, ...] | None = None
    unit_type: str | None = None
    allowed_units: tuple[str, ...] | None = None
    default_unit: str | None = None
    show_when: Any = None

    @field_validator("show_when")
    @classmethod
    def check_show_when(cls, v: Any) -> Any:
        parse_show_when(v)
        return v

    @property
    def visibility(self) -> Predicate | None:
        return parse_show_when(self.show_when)

    @model_validator(mode="after")
    def validate_shape(self):
        if self.type in _CHOICE_TYPES:
            if not self.options:
                raise ValueError(f"input '{self.id}' of type {self.type.value} needs options")
            if self.default is not None and str(self.default) not in self.options:
                raise ValueError(
                    f"input '{self.id}' default {self.default!r} is not one of its options",
                )
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"input '{self.id}' has min > max")
        if self.default is not None and self.type in _NUMERIC_TYPES:
            problem = self.violation(self.default)
            if problem is not None:
                raise ValueError(f"input '{self.id}' default {problem}")
        if self.unit_type is not None:
            _check_units(self)
        elif self.allowed_units or self.default_unit:
            raise ValueError(f"input '{self.id}' declares units without a unit_type")
        return self

    def violation(self, value: Any) -> str | None:
        """Why a submitted value falls outside this input's options or bounds.

        Numeric bounds apply to the number as entered, in whichever unit was
        chosen. Values that are not numbers at all are left to the evaluator,
        which treats them as missing.
        """
        if self.type in _CHOICE_TYPES:
            if str(value) in self.options or _matches_numeric_option(value, self.options):
                return None
            return f"must be one of: {', '.join(self.options)}"
        if self.type not in _NUMERIC_TYPES:
            return None
        number = to_number(value)
        if number is None:
            return None
        if self.min is not None and number < self.min:
            return f"must be at least {self.min:g}"
        if self.max is not None and number > self.max:
            return f"must be at most {self.max:g}"
        return None


def _matches_numeric_option(value: Any, options: tuple[str, ...]) -> bool:
    """Numeric submissions match by value: 2.0 picks option "2"."""
    number = to_number(value)
    return number is not None and any(to_number(option) == number for option in options)


def _check_units(definition: InputDefinition) -> None:
    group = get_unit_group(definition.unit_type)
    if group is None:
        raise ValueError(
            f"input '{definition.id}' has unknown unit_type '{definition.unit_type}'",
        )
    allowed = definition.allowed_units or group.unit_ids
    unknown = [unit for unit in allowed if group.find(unit) is None]
    if unknown:
        raise ValueError(
            f"input '{definition.id}' allows units not in '{group.type}': {', '.join(unknown)}",
        )
    if definition.default_unit is not None and definition.default_unit not in allowed:
        raise ValueError(
            f"input '{definition.id}' default_unit '{definition.default_unit}' is not allowed",
        )


class ResultSlot(BaseModel):
    """One output value the evaluator fills."""
    model_config = _FROZEN

    id: str = Field(pattern=r"^[a-zA-Z][a-zA-Z0-9]*$")
    type: ResultType = ResultType.SECONDARY
    format: ResultFormat = ResultFormat.NUMBER
    show_when: Any = None

    @field_validator("show_when")
    @classmethod
    def check_show_when(cls, v: Any) -> Any:
        parse_show_when(v)
        return v

    @property
    def visibility(self) -> Predicate | None:
        return parse_show_when(self.show_when)


class ChartDefinition(BaseModel):
    model_config = _FROZEN

    id: str
    type: ChartType = ChartType.BAR
    metadata_key: str = "chartData"
    x_key: str
    series: tuple[str, ...]


class TableDefinition(BaseModel):
    model_config = _FROZEN

    id: str
    metadata_key: str = "tableData"
    columns: tuple[str, ...]


class PresetDefinition(BaseModel):
    model_config = _FROZEN

    id: str
    icon: str | None = None
    values: dict[str, Any]


class SensitivityDefinition(BaseModel):
    """Default sweep for the sensitivity endpoint."""
    model_config = _FROZEN

    input_id: str
    result_id: str
    steps: int = Field(9, ge=3, le=41)
    range_percent: float = Field(20.0, gt=0, le=100)


class Reference(BaseModel):
    model_config = _FROZEN

    title: str
    source: str
    url: str | None = None


class CalculatorConfig(BaseModel):
    """Full, validated definition of one calculator."""
    model_config = _FROZEN

    id: str = Field(pattern=r"^[a-z][a-z0-9-]*$")
    version: str = "1.0"
    category: str
    icon: str | None = None
    inputs: tuple[InputDefinition, ...]
    results: tuple[ResultSlot, ...]
    charts: tuple[ChartDefinition, ...] = ()
    tables: tuple[TableDefinition, ...] = ()
    presets: tuple[PresetDefinition, ...] = ()
    sensitivity: SensitivityDefinition | None = None
    references: tuple[Reference, ...] = ()
    related_calculators: tuple[str, ...] = ()
    text: dict[str, dict[str, Any]]

    @model_validator(mode="after")
    def validate_references(self):
        problems = _collect_problems(self)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    # --- Lookup helpers ------------------------------------------------------

    @property
    def input_ids(self) -> tuple[str, ...]:
        return tuple(definition.id for definition in self.inputs)

    @property
    def result_ids(self) -> tuple[str, ...]:
        return tuple(slot.id for slot in self.results)

    def get_input(self, input_id: str) -> InputDefinition | None:
        for definition in self.inputs:
            if definition.id == input_id:
                return definition
        return None

    def input_defaults(self) -> dict[str, Any]:
        return {
            definition.id: definition.default
            for definition in self.inputs
            if definition.default is not None
        }

    def default_units(self) -> dict[str, str]:
        return {
            definition.id: definition.default_unit
            for definition in self.inputs
            if definition.default_unit is not None
        }

    def slug_for(self, locale: Locale) -> str:
        bundle = self.text.get(locale.value) or self.text[FALLBACK_LOCALE.value]
        return bundle.get("slug") or self.text[FALLBACK_LOCALE.value].get("slug") or self.id


def _duplicates(ids: tuple[str, ...]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for item in ids:
        if item in seen and item not in dupes:
            dupes.append(item)
        seen.add(item)
    return dupes


def _collect_problems(config: CalculatorConfig) -> list[str]:
    problems: list[str] = []

    for dupe in _duplicates(config.input_ids):
        problems.append(f"duplicate input id '{dupe}'")
    for dupe in _duplicates(config.result_ids):
        problems.append(f"duplicate result id '{dupe}'")

    declared: set[str] = set()
    for definition in config.inputs:
        for ref in sorted(referenced_fields(definition.visibility)):
            if ref == definition.id:
                problems.append(f"input '{definition.id}' show_when references itself")
            elif ref not in declared:
                problems.append(
                    f"input '{definition.id}' show_when references '{ref}' "
                    "which is not declared before it",
                )
        declared.add(definition.id)

    all_inputs = set(config.input_ids)
    for slot in config.results:
        for ref in sorted(referenced_fields(slot.visibility) - all_inputs):
            problems.append(f"result '{slot.id}' show_when references unknown input '{ref}'")

    for preset in config.presets:
        for key in sorted(set(preset.values) - all_inputs):
            problems.append(f"preset '{preset.id}' sets unknown input '{key}'")

    if config.sensitivity is not None:
        if config.sensitivity.input_id not in all_inputs:
            problems.append(f"sensitivity input '{config.sensitivity.input_id}' is not declared")
        if config.sensitivity.result_id not in config.result_ids:
            problems.append(f"sensitivity result '{config.sensitivity.result_id}' is not declared")

    if FALLBACK_LOCALE.value not in config.text:
        problems.append(f"text bundle for fallback locale '{FALLBACK_LOCALE.value}' is missing")
    supported = {locale.value for locale in Locale}
    for code in sorted(set(config.text) - supported):
        problems.append(f"text bundle for unsupported locale '{code}'")
    return problems


def load_calculator_config(raw: Mapping[str, Any]) -> CalculatorConfig:
    """Validate an authored definition; raise CalculatorConfigError on any problem."""
    calculator_id = str(raw.get("id", "<unknown>")) if isinstance(raw, Mapping) else "<unknown>"
    try:
        return CalculatorConfig.model_validate(raw)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(loc) for loc in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        ]
        raise CalculatorConfigError(calculator_id, problems) from e
