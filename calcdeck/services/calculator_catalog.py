"""Calculator Catalog — loads YAML definitions once and runs evaluations for the API.

Invariants:
    - Every definition is validated at load time; a bad file fails startup, not a request
    - Every loaded definition has a registered evaluator (core/calculator_registry.py)
    - Ids and localized slugs are unique across the catalog
    - Defaults and default units are applied before evaluation; explicit values always win
    - A unit outside an input's allowed units is rejected with UnknownUnitError (400)
    - A value outside an input's options or min/max is rejected with InputValidationError (400)

Design Decisions:
    - Catalog is an immutable object built by load_catalog(); get_catalog() caches
      the one built from settings (lru_cache, same as get_settings)
    - Routes pass plain dicts in and get plain dicts out; evaluators stay unaware of HTTP
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from calcdeck.config import get_settings
from calcdeck.core.calculator_registry import get_evaluator
from calcdeck.core.calculator_schema import CalculatorConfig, load_calculator_config
from calcdeck.core.domain_types import Locale
from calcdeck.core.errors import (
    CalculatorConfigError, ErrorContext, InputValidationError,
    ResourceNotFoundError, UnknownUnitError,
)
from calcdeck.core.evaluation import EvaluationRequest, EvaluationResult
from calcdeck.core.locale_text import LocaleText
from calcdeck.core.sensitivity_analysis import run_sensitivity
from calcdeck.core.unit_registry import get_unit_group
from calcdeck.core.visibility import is_visible

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


@dataclass(frozen=True)
class CalculatorCatalog:
    """All calculator definitions, indexed by id and by every localized slug."""
    configs: Mapping[str, CalculatorConfig]
    slugs: Mapping[str, str]

    # --- Lookup --------------------------------------------------------------

    def get(self, id_or_slug: str) -> CalculatorConfig:
        calculator_id = id_or_slug if id_or_slug in self.configs else self.slugs.get(id_or_slug)
        if calculator_id is None:
            raise ResourceNotFoundError(
                "Calculator", id_or_slug, ErrorContext(calculator_id=id_or_slug),
            )
        return self.configs[calculator_id]

    def locale_text(self, config: CalculatorConfig, locale: Locale) -> LocaleText:
        return LocaleText.from_bundles(config.text, locale)

    def list_summaries(self, locale: Locale) -> list[dict[str, Any]]:
        summaries = []
        for config in self.configs.values():
            text = self.locale_text(config, locale)
            summaries.append({
                "id": config.id,
                "version": config.version,
                "category": config.category,
                "icon": config.icon,
                "name": text.text("name", config.id),
                "slug": config.slug_for(locale),
                "subtitle": text.text("subtitle"),
            })
        return summaries

    def describe(self, config: CalculatorConfig, locale: Locale) -> dict[str, Any]:
        """Full definition plus merged text for one locale."""
        body = config.model_dump(mode="json", exclude={"text"})
        body["locale"] = locale.value
        body["slug"] = config.slug_for(locale)
        body["text"] = self.locale_text(config, locale).merged()
        body["defaults"] = {
            "values": config.input_defaults(),
            "units": config.default_units(),
        }
        return body

    # --- Request preparation -------------------------------------------------

    def resolve_inputs(
        self,
        config: CalculatorConfig,
        values: Mapping[str, Any],
        units: Mapping[str, str],
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Fill defaults for missing values/units and check every chosen unit."""
        resolved_values = {
            key: value for key, value in values.items() if not _is_missing(value)
        }
        for key, default in config.input_defaults().items():
            resolved_values.setdefault(key, default)

        resolved_units = dict(config.default_units())
        for input_id, unit_id in units.items():
            definition = config.get_input(input_id)
            if definition is None or definition.unit_type is None or not unit_id:
                continue
            group = get_unit_group(definition.unit_type)
            allowed = definition.allowed_units or (group.unit_ids if group else ())
            if unit_id not in allowed:
                raise UnknownUnitError(
                    unit_id, definition.unit_type,
                    ErrorContext(calculator_id=config.id, field=input_id),
                )
            resolved_units[input_id] = unit_id
        return resolved_values, resolved_units

    def visibility(
        self, config: CalculatorConfig, values: Mapping[str, Any],
    ) -> dict[str, dict[str, bool]]:
        return {
            "inputs": {
                definition.id: is_visible(definition.visibility, values)
                for definition in config.inputs
            },
            "results": {
                slot.id: is_visible(slot.visibility, values)
                for slot in config.results
            },
        }

    def check_inputs(
        self, config: CalculatorConfig, values: Mapping[str, Any], text: LocaleText,
    ) -> None:
        """Reject values outside an input's options or min/max with InputValidationError."""
        for definition in config.inputs:
            if definition.id not in values:
                continue
            problem = definition.violation(values[definition.id])
            if problem is not None:
                label = text.input_label(definition.id, definition.id)
                raise InputValidationError(
                    f"{label} {problem}", definition.id,
                    ErrorContext(calculator_id=config.id),
                )

    def build_request(
        self,
        config: CalculatorConfig,
        values: Mapping[str, Any],
        units: Mapping[str, str],
        locale: Locale,
    ) -> EvaluationRequest:
        resolved_values, resolved_units = self.resolve_inputs(config, values, units)
        text = self.locale_text(config, locale)
        self.check_inputs(config, resolved_values, text)
        return EvaluationRequest(
            values=resolved_values,
            units=resolved_units,
            text=text,
            locale=locale,
        )

    # --- Operations ----------------------------------------------------------

    def evaluate(
        self,
        config: CalculatorConfig,
        values: Mapping[str, Any],
        units: Mapping[str, str],
        locale: Locale,
    ) -> dict[str, Any]:
        request = self.build_request(config, values, units, locale)
        result: EvaluationResult = get_evaluator(config.id)(request)
        logger.info(
            f"Evaluated {config.id} (valid={result.is_valid})",
            extra={"calculator_id": config.id, "locale": locale.value},
        )
        return {
            "calculatorId": config.id,
            "locale": locale.value,
            **result.to_dict(),
            "visibility": self.visibility(config, request.values),
        }

    def sensitivity(
        self,
        config: CalculatorConfig,
        values: Mapping[str, Any],
        units: Mapping[str, str],
        locale: Locale,
        input_id: str | None = None,
        result_id: str | None = None,
        steps: int | None = None,
        range_percent: float | None = None,
    ) -> dict[str, Any]:
        defaults = config.sensitivity
        input_id = input_id or (defaults.input_id if defaults else None)
        result_id = result_id or (defaults.result_id if defaults else None)
        if input_id is None or config.get_input(input_id) is None:
            raise InputValidationError(
                f"Unknown sensitivity input '{input_id}'", "input_id",
                ErrorContext(calculator_id=config.id),
            )
        if result_id is None or result_id not in config.result_ids:
            raise InputValidationError(
                f"Unknown sensitivity result '{result_id}'", "result_id",
                ErrorContext(calculator_id=config.id),
            )
        steps = steps or (defaults.steps if defaults else 9)
        range_percent = range_percent or (defaults.range_percent if defaults else 20.0)

        request = self.build_request(config, values, units, locale)
        definition = config.get_input(input_id)
        points = run_sensitivity(
            get_evaluator(config.id), request, input_id, result_id, steps, range_percent,
            lower=definition.min, upper=definition.max,
        )
        logger.info(
            f"Sensitivity sweep on {config.id}.{input_id} ({len(points)} points)",
            extra={"calculator_id": config.id, "locale": locale.value},
        )
        return {
            "calculatorId": config.id,
            "inputId": input_id,
            "resultId": result_id,
            "inputLabel": request.text.input_label(input_id, input_id),
            "resultLabel": request.text.result_label(result_id, result_id),
            "rangePercent": range_percent,
            "points": points,
        }


# ─── Loading ─────────────────────────────────────────────────────

def read_definition(path: Path) -> CalculatorConfig:
    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise CalculatorConfigError(path.stem, [f"{path.name} is not a mapping"])
    return load_calculator_config(raw)


def load_catalog(directory: Path) -> CalculatorCatalog:
    """Read and validate every *.yaml definition in a directory."""
    configs: dict[str, CalculatorConfig] = {}
    slugs: dict[str, str] = {}
    for path in sorted(Path(directory).glob("*.yaml")):
        config = read_definition(path)
        if config.id in configs:
            raise CalculatorConfigError(config.id, [f"duplicate calculator id in {path.name}"])
        if get_evaluator(config.id) is None:
            raise CalculatorConfigError(config.id, ["no evaluator registered for this id"])
        for bundle in config.text.values():
            slug = bundle.get("slug")
            if not slug:
                continue
            owner = slugs.setdefault(slug, config.id)
            if owner != config.id:
                raise CalculatorConfigError(
                    config.id, [f"slug '{slug}' is already used by '{owner}'"],
                )
        configs[config.id] = config
        logger.debug(f"Loaded calculator {config.id}", extra={"calculator_id": config.id})
    logger.info(f"Calculator catalog loaded: {len(configs)} definitions")
    return CalculatorCatalog(configs=configs, slugs=slugs)


@lru_cache
def get_catalog() -> CalculatorCatalog:
    return load_catalog(get_settings().calculators_dir)
