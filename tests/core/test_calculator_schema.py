"""Calculator Schema — load-time validation of calculator definitions.

Tests:
    - The shipped definitions load cleanly
    - show_when may only reference inputs declared earlier (no self, no forward refs)
    - Duplicate ids, unknown units and bad choice or numeric defaults are rejected
    - Submitted values are checked against options and min/max
    - Every problem surfaces as CalculatorConfigError naming the calculator
"""

import pytest
from pydantic import ValidationError

from calcdeck.config import get_settings
from calcdeck.core.calculator_schema import InputDefinition, load_calculator_config
from calcdeck.core.domain_types import Locale
from calcdeck.core.errors import CalculatorConfigError
from calcdeck.services.calculator_catalog import read_definition


def _definition(**overrides):
    raw = {
        "id": "sample",
        "category": "everyday",
        "inputs": [
            {"id": "mode", "type": "radio", "default": "basic", "options": ["basic", "advanced"]},
            {
                "id": "length", "type": "number", "unit_type": "length",
                "allowed_units": ["m", "ft"], "default_unit": "m",
                "show_when": {"field": "mode", "value": "advanced"},
            },
        ],
        "results": [{"id": "total", "type": "primary"}],
        "text": {"en": {"name": "Sample", "slug": "sample-calculator"}},
    }
    raw.update(overrides)
    return raw


def _problems(raw) -> str:
    with pytest.raises(CalculatorConfigError) as exc_info:
        load_calculator_config(raw)
    assert exc_info.value.context.calculator_id == raw.get("id", "<unknown>")
    return exc_info.value.message


# --- Shipped definitions ---


@pytest.mark.parametrize("name", ["calorie", "compound-interest", "mulch-gravel"])
def test_shipped_definitions_load(name):
    config = read_definition(get_settings().calculators_dir / f"{name}.yaml")
    assert config.id == name
    assert config.sensitivity is not None
    assert config.slug_for(Locale.EN)


def test_valid_definition_helpers():
    config = load_calculator_config(_definition())
    assert config.input_ids == ("mode", "length")
    assert config.input_defaults() == {"mode": "basic"}
    assert config.default_units() == {"length": "m"}
    assert config.slug_for(Locale.FR) == "sample-calculator"


def test_definition_is_frozen():
    config = load_calculator_config(_definition())
    with pytest.raises(ValidationError):
        config.category = "finance"


# --- show_when references ---


def test_forward_reference_rejected():
    inputs = _definition()["inputs"]
    message = _problems(_definition(inputs=list(reversed(inputs))))
    assert "not declared before it" in message


def test_self_reference_rejected():
    inputs = [{
        "id": "mode", "type": "radio", "options": ["a", "b"],
        "show_when": {"field": "mode", "value": "a"},
    }]
    assert "references itself" in _problems(_definition(inputs=inputs))


def test_result_reference_to_unknown_input_rejected():
    results = [{"id": "total", "show_when": {"field": "phantom", "value": 1}}]
    assert "unknown input 'phantom'" in _problems(_definition(results=results))


def test_malformed_show_when_rejected():
    inputs = [{"id": "mode", "type": "radio", "options": ["a"], "show_when": {"field": "x"}}]
    _problems(_definition(inputs=inputs))


# --- Ids, units, choices ---


def test_duplicate_input_ids_rejected():
    inputs = [
        {"id": "age", "type": "number"},
        {"id": "age", "type": "number"},
    ]
    assert "duplicate input id 'age'" in _problems(_definition(inputs=inputs))


def test_duplicate_result_ids_rejected():
    results = [{"id": "total"}, {"id": "total"}]
    assert "duplicate result id 'total'" in _problems(_definition(results=results))


def test_unknown_unit_type_rejected():
    inputs = [{"id": "mass", "type": "number", "unit_type": "mass"}]
    assert "unknown unit_type 'mass'" in _problems(_definition(inputs=inputs))


def test_allowed_unit_outside_group_rejected():
    inputs = [{"id": "length", "type": "number", "unit_type": "length", "allowed_units": ["m", "kg"]}]
    assert "kg" in _problems(_definition(inputs=inputs))


def test_default_unit_must_be_allowed():
    inputs = [{
        "id": "length", "type": "number", "unit_type": "length",
        "allowed_units": ["m"], "default_unit": "ft",
    }]
    assert "default_unit 'ft'" in _problems(_definition(inputs=inputs))


def test_choice_default_must_be_an_option():
    inputs = [{"id": "mode", "type": "select", "default": "pro", "options": ["basic"]}]
    assert "not one of its options" in _problems(_definition(inputs=inputs))


def test_choice_needs_options():
    inputs = [{"id": "mode", "type": "select"}]
    assert "needs options" in _problems(_definition(inputs=inputs))


def test_min_above_max_rejected():
    inputs = [{"id": "age", "type": "number", "min": 10, "max": 5}]
    assert "min > max" in _problems(_definition(inputs=inputs))


def test_numeric_default_outside_bounds_rejected():
    inputs = [{"id": "age", "type": "number", "default": 120, "min": 15, "max": 100}]
    assert "default must be at most 100" in _problems(_definition(inputs=inputs))


# --- Submitted values ---


def test_violation_checks_numeric_bounds():
    age = InputDefinition(id="age", type="number", min=15, max=100)
    assert age.violation(30) is None
    assert age.violation("14") == "must be at least 15"
    assert age.violation(101.5) == "must be at most 100"


def test_violation_leaves_non_numbers_to_the_evaluator():
    age = InputDefinition(id="age", type="number", min=15)
    assert age.violation("abc") is None
    assert age.violation({"primary": 5, "secondary": 7}) is None


def test_violation_checks_choice_options():
    bag_size = InputDefinition(id="bagSize", type="select", options=("0.5", "1", "2", "3"))
    assert bag_size.violation("2") is None
    assert bag_size.violation(2.0) is None
    assert bag_size.violation("-2") == "must be one of: 0.5, 1, 2, 3"


# --- Text, presets, sensitivity ---


def test_english_bundle_required():
    assert "fallback locale 'en'" in _problems(_definition(text={"es": {"name": "X"}}))


def test_unsupported_locale_bundle_rejected():
    text = {"en": {"name": "X"}, "ja": {"name": "Y"}}
    assert "unsupported locale 'ja'" in _problems(_definition(text=text))


def test_preset_with_unknown_input_rejected():
    presets = [{"id": "quick", "values": {"phantom": 1}}]
    assert "sets unknown input 'phantom'" in _problems(_definition(presets=presets))


def test_sensitivity_must_reference_declared_fields():
    sensitivity = {"input_id": "mode", "result_id": "missing"}
    assert "sensitivity result 'missing'" in _problems(_definition(sensitivity=sensitivity))


def test_unknown_top_level_key_rejected():
    _problems(_definition(colour="red"))
