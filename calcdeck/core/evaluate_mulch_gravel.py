"""Mulch & Gravel Evaluator — landscaping volume, weight, bag count and cost.

Invariants:
    - Pure: same request → same result, no IO
    - depth ≤ 0, a missing shape dimension, or area ≤ 0 → EvaluationResult.invalid()
    - bag size ≤ 0, or any figure that overflows → EvaluationResult.invalid()
    - cubicYards == cubicFeet / 27 and cubicMeters == cubicFeet × 0.028316846592 (exact)
    - bagsNeeded == ceil(cubicFeet / bagSize); bag count is the only rounded value
    - totalCost == materialCost + deliveryCost

Design Decisions:
    - Dimensions go through the unit registry (length → m, area → m²) and then to
      feet with exact factors, so metric and imperial entries land on the same number
    - Densities are authored in lb/ft³ because that is how suppliers quote them
    - Weight kept in kg in values; lbs and short tons added alongside for display
"""

import math

from calcdeck.core.evaluation import EvaluationRequest, EvaluationResult, all_finite
from calcdeck.core.locale_text import LocaleText, fill_template
from calcdeck.core.number_format import (
    PLACEHOLDER, format_currency, format_number, round_half_up,
)

FT_PER_M = 1 / 0.3048
SQFT_PER_M2 = 1 / 0.09290304
M3_PER_FT3 = 0.028316846592
CUFT_PER_CUYD = 27
KG_PER_LB = 0.453592
LBS_PER_SHORT_TON = 2000
# 1 yd³ spread 1 inch deep covers 324 ft²
SQFT_INCH_PER_CUYD = 324

# lb/ft³ and the English display name
MATERIAL_DENSITY: dict[str, tuple[float, str]] = {
    "woodChips": (15, "Wood Chips"),
    "shreddedBark": (20, "Shredded Bark"),
    "hardwoodMulch": (25, "Hardwood Mulch"),
    "dyedMulch": (22, "Dyed Mulch (Black/Brown/Red)"),
    "rubberMulch": (37, "Rubber Mulch"),
    "straw": (12, "Straw / Pine Needles"),
    "peaGravel": (96, "Pea Gravel"),
    "crushedStone": (100, "Crushed Stone (#57)"),
    "riverRock": (90, "River Rock"),
    "limestone": (95, "Limestone Gravel"),
    "lavaRock": (45, "Lava Rock"),
    "marbleChips": (95, "Marble Chips"),
    "topsoil": (75, "Topsoil"),
    "compost": (45, "Compost"),
    "gardenSoil": (80, "Garden Soil Mix"),
    "sand": (100, "Sand (Play/Masonry)"),
}
DEFAULT_MATERIAL = "hardwoodMulch"

# inches: (min, max, typical)
DEPTH_GUIDE: dict[str, tuple[float, float, float]] = {
    "woodChips": (2, 4, 3),
    "shreddedBark": (2, 3, 2),
    "hardwoodMulch": (2, 3, 3),
    "dyedMulch": (2, 3, 2),
    "rubberMulch": (2, 3, 2),
    "straw": (2, 4, 3),
    "peaGravel": (2, 4, 3),
    "crushedStone": (2, 4, 3),
    "riverRock": (2, 4, 3),
    "limestone": (2, 4, 3),
    "lavaRock": (2, 4, 3),
    "marbleChips": (2, 4, 2),
    "topsoil": (3, 6, 4),
    "compost": (1, 3, 2),
    "gardenSoil": (3, 6, 4),
    "sand": (2, 4, 3),
}

COVERAGE_DEPTHS_IN = (1, 2, 3, 4, 6)
REFERENCE_BAG_SIZES = (("bags2", 2.0), ("bags3", 3.0), ("bags05", 0.5))
DEFAULT_DEPTH = 3.0
DEFAULT_WASTE = 10.0
DEFAULT_BAG_SIZE = 2.0

DEFAULT_SUMMARY = (
    "You need {cubicYards} of {material} to cover {area} at {depth} deep "
    "(including {waste}% for waste/settling)."
)


# ─── Formula pieces ──────────────────────────────────────────────

def shape_area_sqft(request: EvaluationRequest, shape: str) -> float | None:
    """Area in ft² for the chosen shape; None when a dimension is missing."""
    def feet(field_id: str) -> float | None:
        meters = request.number_in_base(field_id, "length", "ft")
        return meters * FT_PER_M if meters else None

    if shape == "circle":
        diameter = feet("diameter")
        if not diameter:
            return None
        return math.pi * (diameter / 2) ** 2
    if shape == "triangle":
        base, height = feet("triangleBase"), feet("triangleHeight")
        if not base or not height:
            return None
        return 0.5 * base * height
    if shape == "directArea":
        square_meters = request.number_in_base("directArea", "area", "ft2")
        return square_meters * SQFT_PER_M2 if square_meters else None
    length, width = feet("length"), feet("width")
    if not length or not width:
        return None
    return length * width


def volume_cuft(area_sqft: float, depth_ft: float, waste_percent: float) -> float:
    return area_sqft * depth_ft * (1 + waste_percent / 100)


def bags_needed(cubic_feet: float, bag_size: float) -> int:
    # Guard against 12.000000000001 bags from float noise
    return math.ceil(round(cubic_feet / bag_size, 9))


def material_cost(
    pricing_mode: str, cubic_yards: float, bags: int, bulk_price: float, bag_price: float,
) -> float:
    if pricing_mode == "bags":
        return bags * bag_price if bag_price > 0 else 0.0
    return cubic_yards * bulk_price if bulk_price > 0 else 0.0


def depth_check(material: str, depth_in: float) -> dict:
    low, high, typical = DEPTH_GUIDE.get(material, DEPTH_GUIDE[DEFAULT_MATERIAL])
    if depth_in < low:
        status = "tooShallow"
    elif depth_in > high:
        status = "tooDeep"
    else:
        status = "ok"
    return {
        "material": material,
        "depthIn": depth_in,
        "minIn": low,
        "maxIn": high,
        "typicalIn": typical,
        "status": status,
    }


# ─── Evaluator ───────────────────────────────────────────────────

def evaluate_mulch_gravel(request: EvaluationRequest) -> EvaluationResult:
    text = request.text
    locale = request.locale

    material = request.choice("materialType", DEFAULT_MATERIAL)
    if material not in MATERIAL_DENSITY:
        material = DEFAULT_MATERIAL
    shape = request.choice("areaShape", "rectangle")
    waste = request.number("wasteFactor", DEFAULT_WASTE)
    pricing_mode = request.choice("pricingMode", "bulk")
    bulk_price = request.number("bulkPrice") or 0.0
    bag_price = request.number("bagPrice") or 0.0
    bag_size_choice = request.choice("bagSize", "2")
    bag_size = request.number("bagSize", DEFAULT_BAG_SIZE)
    delivery_fee = request.number("deliveryFee") or 0.0

    depth_unit = request.unit("depth", "in")
    depth_raw = request.number("depth", DEFAULT_DEPTH)
    depth_m = request.number_in_base("depth", "length", "in")
    if depth_m is None and request.values.get("depth") is None:
        depth_unit, depth_m = "in", DEFAULT_DEPTH * 0.0254
    if depth_m is None or depth_m <= 0 or waste < 0 or bag_size <= 0:
        return EvaluationResult.invalid()
    depth_ft = depth_m * FT_PER_M

    try:
        area_sqft = shape_area_sqft(request, shape)
    except OverflowError:
        return EvaluationResult.invalid()
    if area_sqft is None or area_sqft <= 0:
        return EvaluationResult.invalid()
    area_m2 = area_sqft / SQFT_PER_M2

    cubic_feet = volume_cuft(area_sqft, depth_ft, waste)
    cubic_yards = cubic_feet / CUFT_PER_CUYD
    cubic_meters = cubic_feet * M3_PER_FT3

    density_lb_ft3, material_default_label = MATERIAL_DENSITY[material]
    weight_lbs = cubic_feet * density_lb_ft3
    weight_tons = weight_lbs / LBS_PER_SHORT_TON
    weight_kg = weight_lbs * KG_PER_LB
    smallest_bag = min(bag_size, *(size for _, size in REFERENCE_BAG_SIZES))
    if not all_finite(area_sqft, cubic_feet, weight_lbs, cubic_feet / smallest_bag):
        return EvaluationResult.invalid()

    bags = bags_needed(cubic_feet, bag_size)
    cost = material_cost(pricing_mode, cubic_yards, bags, bulk_price, bag_price)
    total = cost + delivery_fee
    if not all_finite(cost, total):
        return EvaluationResult.invalid()

    currency = (
        request.units.get("bulkPrice") or request.units.get("bagPrice")
        or request.units.get("deliveryFee") or "USD"
    ).upper()

    # --- Formatting ---------------------------------------------------------
    cu_yd = text.resolve("cuYd", "cu yd")
    cu_ft = text.resolve("cuFt", "cu ft")
    cu_m = text.resolve("cuM", "m³")
    sq_ft = text.resolve("sqFt", "sq ft")
    sq_m = text.resolve("sqM", "m²")
    kg = text.resolve("kg", "kg")
    bag_word = text.resolve("bag", "bag") if bags == 1 else text.resolve("bags", "bags")
    material_label = text.option_label("materialType", material, material_default_label)

    def money(amount: float) -> str:
        return format_currency(amount, currency, locale)

    if depth_unit == "cm":
        depth_text = f"{format_number(depth_raw, 1 if depth_raw % 1 else 0, locale)} cm"
    else:
        depth_text = (
            f"{format_number(depth_raw, 1 if depth_raw % 1 else 0, locale)} "
            f"{text.resolve('in', 'in')}"
        )

    if round_half_up(weight_tons, 1) >= 1:
        weight_text = (
            f"{format_number(weight_tons, 1, locale)} {text.resolve('tons', 'tons')} "
            f"({format_number(weight_kg, 0, locale)} {kg})"
        )
    else:
        weight_text = (
            f"{format_number(weight_lbs, 0, locale)} {text.resolve('lbs', 'lbs')} "
            f"({format_number(weight_kg, 0, locale)} {kg})"
        )

    delivery_text = money(delivery_fee) if delivery_fee > 0 else PLACEHOLDER
    if cost > 0:
        material_text, total_text = money(cost), money(total)
    else:
        material_text = PLACEHOLDER
        total_text = money(delivery_fee) if delivery_fee > 0 else PLACEHOLDER

    area_text = f"{format_number(area_sqft, 0, locale)} {sq_ft}"
    formatted = {
        "cubicYards": f"{format_number(cubic_yards, 2, locale)} {cu_yd}",
        "cubicFeet": f"{format_number(cubic_feet, 0, locale)} {cu_ft}",
        "cubicMeters": f"{format_number(cubic_meters, 2, locale)} {cu_m}",
        "weight": weight_text,
        "bagsNeeded": (
            f"{format_number(bags, 0, locale)} {bag_word} "
            f"({bag_size_choice} {cu_ft} {text.resolve('each', 'each')})"
        ),
        "area": f"{area_text} ({format_number(area_m2, 0, locale)} {sq_m})",
        "materialCost": material_text,
        "deliveryCost": delivery_text,
        "totalCost": total_text,
    }

    summary = fill_template(
        text.template("summary", DEFAULT_SUMMARY),
        cubicYards=formatted["cubicYards"],
        material=material_label,
        area=area_text,
        depth=depth_text,
        waste=format_number(waste, 0 if waste == int(waste) else 1, locale),
    )

    depth_in = depth_ft * 12
    return EvaluationResult(
        values={
            "cubicYards": cubic_yards,
            "cubicFeet": cubic_feet,
            "cubicMeters": cubic_meters,
            "weight": weight_kg,
            "weightLbs": weight_lbs,
            "weightTons": weight_tons,
            "bagsNeeded": float(bags),
            "area": area_m2,
            "areaSqFt": area_sqft,
            "materialCost": cost,
            "deliveryCost": delivery_fee,
            "totalCost": total,
        },
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata={
            "currency": currency,
            "densityLbFt3": density_lb_ft3,
            "depthCheck": depth_check(material, depth_in),
            "chartData": _coverage_chart(),
            "tableData": _coverage_table(
                area_sqft, cubic_feet, depth_text, text, locale,
            ),
        },
    )


# ─── Metadata builders ───────────────────────────────────────────

def _coverage_chart() -> list[dict]:
    """ft² covered by one cubic yard at each reference depth."""
    return [
        {"depth": depth, "coverage": SQFT_INCH_PER_CUYD / depth}
        for depth in COVERAGE_DEPTHS_IN
    ]


def _coverage_table(
    area_sqft: float, cubic_feet: float, depth_text: str, text: LocaleText, locale,
) -> list[dict]:
    sq_ft = text.resolve("sqFt", "sq ft")
    unit_in = text.resolve("in", "in")
    per_yard_bags = {
        key: str(math.ceil(CUFT_PER_CUYD / size)) for key, size in REFERENCE_BAG_SIZES
    }
    rows = [
        {
            "depth": f"{depth} {unit_in}",
            "coverage": f"{format_number(SQFT_INCH_PER_CUYD / depth, 0, locale)} {sq_ft}",
            **per_yard_bags,
        }
        for depth in COVERAGE_DEPTHS_IN
    ]
    rows.append({
        "depth": f"{text.resolve('Your project', 'Your project')}: {depth_text}",
        "coverage": f"{format_number(area_sqft, 0, locale)} {sq_ft}",
        **{key: str(bags_needed(cubic_feet, size)) for key, size in REFERENCE_BAG_SIZES},
    })
    return rows
