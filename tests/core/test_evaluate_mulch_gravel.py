"""Mulch & Gravel Evaluator — volume, bags, weight and cost for landscaping jobs.

Tests:
    - 20 × 4 ft bed at 3 in with 10% waste → 22 ft³ → 0.8148 yd³
    - Metric and imperial entries land on the same volume
    - Bags round up, cost follows the pricing mode, total = material + delivery
    - Missing dimensions, zero depth, negative waste, bad bag size or overflow → invalid sentinel
    - Depth guidance and coverage table metadata
"""

import math

import pytest

from calcdeck.core.domain_types import Locale
from calcdeck.core.evaluation import EvaluationRequest
from calcdeck.core.evaluate_mulch_gravel import (
    bags_needed, depth_check, evaluate_mulch_gravel, material_cost,
)
from calcdeck.services.calculator_catalog import get_catalog

FLOWER_BED = {
    "materialType": "hardwoodMulch",
    "areaShape": "rectangle",
    "length": 20,
    "width": 4,
    "depth": 3,
    "wasteFactor": 10,
    "pricingMode": "bulk",
    "bagSize": "2",
}


def _evaluate(values=None, units=None):
    return evaluate_mulch_gravel(EvaluationRequest(values=values or {}, units=units or {}))


# --- Volume ---


def test_flower_bed_volume():
    result = _evaluate(FLOWER_BED)
    assert result.is_valid
    assert result.values["cubicFeet"] == pytest.approx(22.0)
    assert result.values["cubicYards"] == pytest.approx(22.0 / 27)
    assert result.formatted["cubicYards"] == "0.81 cu yd"


def test_cubic_relations_are_exact():
    values = _evaluate(FLOWER_BED).values
    assert values["cubicYards"] == values["cubicFeet"] / 27
    assert values["cubicMeters"] == values["cubicFeet"] * 0.028316846592


def test_area_stored_in_square_meters():
    result = _evaluate(FLOWER_BED)
    assert result.values["areaSqFt"] == pytest.approx(80.0)
    assert result.values["area"] == pytest.approx(80 * 0.09290304)


def test_metric_dimensions_match_imperial():
    metric = _evaluate(
        {**FLOWER_BED, "length": 6.096, "width": 1.2192, "depth": 7.62},
        {"length": "m", "width": "m", "depth": "cm"},
    )
    assert metric.values["cubicFeet"] == pytest.approx(22.0)


def test_circle_area():
    result = _evaluate({**FLOWER_BED, "areaShape": "circle", "diameter": 6})
    assert result.values["areaSqFt"] == pytest.approx(math.pi * 9)
    assert result.values["bagsNeeded"] == 4.0


def test_triangle_area():
    result = _evaluate({
        **FLOWER_BED, "areaShape": "triangle", "triangleBase": 10, "triangleHeight": 6,
    })
    assert result.values["areaSqFt"] == pytest.approx(30.0)


def test_direct_area_in_square_meters():
    result = _evaluate(
        {**FLOWER_BED, "areaShape": "directArea", "directArea": 10},
        {"directArea": "m2"},
    )
    assert result.values["area"] == pytest.approx(10.0)
    assert result.values["areaSqFt"] == pytest.approx(10 / 0.09290304)


def test_missing_depth_uses_three_inches():
    values = {k: v for k, v in FLOWER_BED.items() if k != "depth"}
    result = _evaluate(values)
    assert result.values["cubicFeet"] == pytest.approx(22.0)


# --- Bags, weight and cost ---


def test_bags_round_up():
    assert bags_needed(22.0, 2.0) == 11
    assert bags_needed(22.0, 3.0) == 8
    assert bags_needed(22.000000000001, 2.0) == 11


def test_bags_needed_reported_as_float():
    result = _evaluate(FLOWER_BED)
    assert result.values["bagsNeeded"] == 11.0
    assert result.formatted["bagsNeeded"] == "11 bags (2 cu ft each)"


def test_weight_from_density():
    result = _evaluate(FLOWER_BED)
    assert result.values["weightLbs"] == pytest.approx(550.0)
    assert result.values["weight"] == pytest.approx(550 * 0.453592)
    assert result.formatted["weight"] == "550 lbs (249 kg)"


def test_heavy_material_formats_in_tons():
    result = _evaluate({**FLOWER_BED, "materialType": "crushedStone"})
    assert result.values["weightTons"] == pytest.approx(1.1)
    assert result.formatted["weight"].startswith("1.1 tons")


def test_bulk_cost_and_delivery():
    result = _evaluate({**FLOWER_BED, "bulkPrice": 40, "deliveryFee": 50})
    assert result.values["materialCost"] == pytest.approx(22 / 27 * 40)
    assert result.values["totalCost"] == result.values["materialCost"] + 50
    assert result.formatted["deliveryCost"] == "$50"


def test_bag_cost_uses_bag_count():
    result = _evaluate({
        **FLOWER_BED, "pricingMode": "bags", "bagPrice": 4, "bagSize": "3",
    })
    assert result.values["bagsNeeded"] == 8.0
    assert result.values["materialCost"] == pytest.approx(32.0)


def test_no_prices_render_placeholders():
    result = _evaluate(FLOWER_BED)
    assert result.values["totalCost"] == 0.0
    assert result.formatted["materialCost"] == "—"
    assert result.formatted["totalCost"] == "—"


def test_currency_follows_price_unit():
    result = _evaluate({**FLOWER_BED, "bulkPrice": 40}, {"bulkPrice": "EUR"})
    assert result.metadata["currency"] == "EUR"
    assert result.formatted["materialCost"].startswith("€")


def test_material_cost_ignores_non_positive_prices():
    assert material_cost("bulk", 2.0, 0, 0.0, 5.0) == 0.0
    assert material_cost("bags", 2.0, 10, 30.0, 0.0) == 0.0


# --- Invalid input ---


def test_zero_depth_is_invalid():
    assert not _evaluate({**FLOWER_BED, "depth": 0}).is_valid


def test_negative_waste_is_invalid():
    assert not _evaluate({**FLOWER_BED, "wasteFactor": -5}).is_valid


def test_non_positive_bag_size_is_invalid():
    assert not _evaluate({**FLOWER_BED, "bagSize": "-2"}).is_valid
    assert not _evaluate({**FLOWER_BED, "bagSize": 0}).is_valid


def test_overflowing_dimensions_are_invalid():
    result = _evaluate({**FLOWER_BED, "length": 1e200, "width": 1e200})
    assert not result.is_valid
    assert result.values == {}


def test_overflowing_circle_is_invalid():
    assert not _evaluate({**FLOWER_BED, "areaShape": "circle", "diameter": 1e200}).is_valid


def test_overflowing_cost_is_invalid():
    assert not _evaluate({**FLOWER_BED, "pricingMode": "bags", "bagPrice": 1e308}).is_valid


def test_missing_width_is_invalid():
    values = {k: v for k, v in FLOWER_BED.items() if k != "width"}
    result = _evaluate(values)
    assert not result.is_valid
    assert result.values == {}
    assert result.summary == ""


# --- Metadata ---


def test_depth_check_statuses():
    assert depth_check("hardwoodMulch", 3)["status"] == "ok"
    assert depth_check("hardwoodMulch", 1)["status"] == "tooShallow"
    assert depth_check("hardwoodMulch", 6)["status"] == "tooDeep"


def test_coverage_table_ends_with_project_row():
    table = _evaluate(FLOWER_BED).metadata["tableData"]
    assert len(table) == 6
    assert table[0]["coverage"] == "324 sq ft"
    assert table[-1]["depth"] == "Your project: 3 in"
    assert table[-1]["bags2"] == "11"


def test_summary_mentions_volume_and_material():
    summary = _evaluate(FLOWER_BED).summary
    assert "0.81 cu yd" in summary
    assert "Hardwood Mulch" in summary
    assert "10%" in summary


def test_bag_text_is_localized():
    catalog = get_catalog()
    config = catalog.get("mulch-gravel")
    request = catalog.build_request(config, FLOWER_BED, {}, Locale.ES)
    result = evaluate_mulch_gravel(request)
    assert result.formatted["bagsNeeded"] == "11 bolsas (2 pie³ cada una)"
