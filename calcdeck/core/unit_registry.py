"""Unit Registry — catalog of unit groups, each with one canonical base unit.

Invariants:
    - Every group has exactly one unit with is_base=True, and its id equals base_unit
    - value_in_base = value × to_base for factor units; function units supply both directions
    - Dual units (ft_in, st_lb) convert a {primary, secondary} pair, never a bare number
    - Pure data: no IO, no conversion logic beyond the per-unit lambdas

Design Decisions:
    - Frozen dataclasses over nested dicts: typo-proof attribute access from unit_conversion
    - Regions drive guess_default_unit(); order inside a group is the tie-breaker
    - Currency rates are approximate, static, USD-based; no live FX
"""

from dataclasses import dataclass
from typing import Callable

_METRIC_REGIONS = (
    "EU", "BR", "MX", "AR", "CL", "CO", "PE", "IN", "JP", "AU", "NZ",
    "DE", "FR", "IT", "ES", "PT",
)
_IMPERIAL_REGIONS = ("US", "CA", "GB", "IE")


@dataclass(frozen=True)
class DualConfig:
    """Two-part unit such as 5 ft 7 in."""
    primary_symbol: str
    secondary_symbol: str
    primary_to_base: float
    secondary_to_base: float
    secondary_max: float


@dataclass(frozen=True)
class UnitDefinition:
    id: str
    symbol: str
    name: str
    to_base: float | None = None
    decimals: int = 2
    regions: tuple[str, ...] = ()
    is_base: bool = False
    to_base_fn: Callable[[float], float] | None = None
    from_base_fn: Callable[[float], float] | None = None
    dual: DualConfig | None = None


@dataclass(frozen=True)
class UnitGroup:
    type: str
    name: str
    base_unit: str
    category: str
    units: tuple[UnitDefinition, ...]

    def find(self, unit_id: str) -> UnitDefinition | None:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None

    @property
    def unit_ids(self) -> tuple[str, ...]:
        return tuple(unit.id for unit in self.units)


# ─── Health / Body ───────────────────────────────────────────────

WEIGHT = UnitGroup(
    type="weight", name="Weight", base_unit="kg", category="health",
    units=(
        UnitDefinition("kg", "kg", "Kilograms", 1, 1, _METRIC_REGIONS, is_base=True),
        UnitDefinition("lbs", "lbs", "Pounds", 0.453592, 1, ("US", "LR", "MM")),
        UnitDefinition("st", "st", "Stones", 6.35029, 1, ("GB", "IE")),
        UnitDefinition("g", "g", "Grams", 0.001, 0),
        UnitDefinition("oz", "oz", "Ounces", 0.0283495, 1),
        UnitDefinition(
            "st_lb", "st/lb", "Stones and Pounds", decimals=0,
            dual=DualConfig("st", "lb", 6.35029, 0.453592, 14),
        ),
    ),
)

HEIGHT = UnitGroup(
    type="height", name="Height", base_unit="cm", category="health",
    units=(
        UnitDefinition("cm", "cm", "Centimeters", 1, 1, _METRIC_REGIONS, is_base=True),
        UnitDefinition("m", "m", "Meters", 100, 2),
        UnitDefinition("in", "in", "Inches", 2.54, 1, _IMPERIAL_REGIONS),
        UnitDefinition("ft", "ft", "Feet", 30.48, 1, _IMPERIAL_REGIONS),
        UnitDefinition(
            "ft_in", "ft/in", "Feet and Inches", decimals=0,
            regions=_IMPERIAL_REGIONS,
            dual=DualConfig("ft", "in", 30.48, 2.54, 12),
        ),
    ),
)

BODY_LENGTH = UnitGroup(
    type="body_length", name="Body Measurement", base_unit="cm", category="health",
    units=(
        UnitDefinition("cm", "cm", "Centimeters", 1, 1, _METRIC_REGIONS, is_base=True),
        UnitDefinition("in", "in", "Inches", 2.54, 1, _IMPERIAL_REGIONS),
    ),
)

BODY_TEMPERATURE = UnitGroup(
    type="body_temperature", name="Body Temperature", base_unit="C", category="health",
    units=(
        UnitDefinition(
            "C", "°C", "Celsius", decimals=1, regions=_METRIC_REGIONS + ("GB",),
            is_base=True, to_base_fn=lambda v: v, from_base_fn=lambda v: v,
        ),
        UnitDefinition(
            "F", "°F", "Fahrenheit", decimals=1, regions=("US",),
            to_base_fn=lambda v: (v - 32) * 5 / 9,
            from_base_fn=lambda v: v * 9 / 5 + 32,
        ),
    ),
)

ENERGY_FOOD = UnitGroup(
    type="energy_food", name="Food Energy", base_unit="kcal", category="health",
    units=(
        UnitDefinition("kcal", "kcal", "Kilocalories", 1, 0, ("US", "CA", "MX", "BR", "AR", "GB"), is_base=True),
        UnitDefinition("cal", "cal", "Calories", 0.001, 0),
        UnitDefinition("kJ", "kJ", "Kilojoules", 0.239006, 0, ("EU", "AU", "NZ")),
    ),
)


# ─── Length / Area / Volume ──────────────────────────────────────

LENGTH = UnitGroup(
    type="length", name="Length", base_unit="m", category="everyday",
    units=(
        UnitDefinition("mm", "mm", "Millimeters", 0.001, 1),
        UnitDefinition("cm", "cm", "Centimeters", 0.01, 2, _METRIC_REGIONS),
        UnitDefinition("m", "m", "Meters", 1, 4, is_base=True),
        UnitDefinition("km", "km", "Kilometers", 1000, 4),
        UnitDefinition("in", "in", "Inches", 0.0254, 3, _IMPERIAL_REGIONS),
        UnitDefinition("ft", "ft", "Feet", 0.3048, 3, _IMPERIAL_REGIONS),
        UnitDefinition("yd", "yd", "Yards", 0.9144, 3),
        UnitDefinition("mi", "mi", "Miles", 1609.344, 4),
    ),
)

AREA = UnitGroup(
    type="area", name="Area", base_unit="m2", category="construction",
    units=(
        UnitDefinition("cm2", "cm²", "Square Centimeters", 0.0001, 2),
        UnitDefinition("m2", "m²", "Square Meters", 1, 2, _METRIC_REGIONS, is_base=True),
        UnitDefinition("hectares", "ha", "Hectares", 10_000, 4),
        UnitDefinition("in2", "in²", "Square Inches", 0.00064516, 2),
        UnitDefinition("ft2", "ft²", "Square Feet", 0.09290304, 2, _IMPERIAL_REGIONS),
        UnitDefinition("yd2", "yd²", "Square Yards", 0.83612736, 2),
        UnitDefinition("acres", "ac", "Acres", 4046.8564224, 4),
    ),
)

VOLUME = UnitGroup(
    type="volume", name="Volume", base_unit="L", category="everyday",
    units=(
        UnitDefinition("mL", "mL", "Milliliters", 0.001, 1, _METRIC_REGIONS),
        UnitDefinition("L", "L", "Liters", 1, 3, is_base=True),
        UnitDefinition("m3", "m³", "Cubic Meters", 1000, 4),
        UnitDefinition("fl_oz", "fl oz", "Fluid Ounces (US)", 0.0295735, 1, ("US", "CA")),
        UnitDefinition("cups", "cups", "Cups (US)", 0.236588, 2),
        UnitDefinition("gal_us", "gal", "Gallons (US)", 3.78541, 3),
        UnitDefinition("ft3", "ft³", "Cubic Feet", 28.316846592, 4),
        UnitDefinition("yd3", "yd³", "Cubic Yards", 764.554857984, 4),
    ),
)

CONSTRUCTION_VOLUME = UnitGroup(
    type="construction_volume", name="Construction Volume", base_unit="m3",
    category="construction",
    units=(
        UnitDefinition("m3", "m³", "Cubic Meters", 1, 2, _METRIC_REGIONS, is_base=True),
        UnitDefinition("ft3", "ft³", "Cubic Feet", 0.028316846592, 2, ("US", "CA", "GB")),
        UnitDefinition("yd3", "yd³", "Cubic Yards", 0.764554857984, 2, ("US", "CA")),
        UnitDefinition("L", "L", "Liters", 0.001, 1),
    ),
)

DENSITY = UnitGroup(
    type="density", name="Density", base_unit="kg_m3", category="science",
    units=(
        UnitDefinition("kg_m3", "kg/m³", "Kilograms per Cubic Meter", 1, 1, is_base=True),
        UnitDefinition("g_cm3", "g/cm³", "Grams per Cubic Centimeter", 1000, 3),
        UnitDefinition("lb_ft3", "lb/ft³", "Pounds per Cubic Foot", 16.01846337, 2),
    ),
)

TEMPERATURE = UnitGroup(
    type="temperature", name="Temperature", base_unit="C", category="everyday",
    units=(
        UnitDefinition(
            "C", "°C", "Celsius", decimals=1, regions=_METRIC_REGIONS + ("GB",),
            is_base=True, to_base_fn=lambda v: v, from_base_fn=lambda v: v,
        ),
        UnitDefinition(
            "F", "°F", "Fahrenheit", decimals=1, regions=("US",),
            to_base_fn=lambda v: (v - 32) * 5 / 9,
            from_base_fn=lambda v: v * 9 / 5 + 32,
        ),
        UnitDefinition(
            "K", "K", "Kelvin", decimals=2,
            to_base_fn=lambda v: v - 273.15,
            from_base_fn=lambda v: v + 273.15,
        ),
    ),
)


# ─── Currency (approximate, USD base) ────────────────────────────

CURRENCY = UnitGroup(
    type="currency", name="Currency", base_unit="USD", category="finance",
    units=(
        UnitDefinition("USD", "$", "US Dollar", 1, 2, ("US",), is_base=True),
        UnitDefinition("CAD", "C$", "Canadian Dollar", 0.74, 2, ("CA",)),
        UnitDefinition("MXN", "MX$", "Mexican Peso", 0.058, 2, ("MX",)),
        UnitDefinition("BRL", "R$", "Brazilian Real", 0.19, 2, ("BR",)),
        UnitDefinition("COP", "COL$", "Colombian Peso", 0.00024, 0, ("CO",)),
        UnitDefinition("ARS", "AR$", "Argentine Peso", 0.001, 2, ("AR",)),
        UnitDefinition("CLP", "CLP$", "Chilean Peso", 0.001, 0, ("CL",)),
        UnitDefinition("PEN", "S/", "Peruvian Sol", 0.27, 2, ("PE",)),
        UnitDefinition(
            "EUR", "€", "Euro", 1.08, 2,
            ("EU", "DE", "FR", "ES", "IT", "PT", "NL", "BE", "AT", "IE", "FI", "GR"),
        ),
        UnitDefinition("GBP", "£", "British Pound", 1.27, 2, ("GB",)),
        UnitDefinition("CHF", "CHF ", "Swiss Franc", 1.13, 2, ("CH",)),
        UnitDefinition("JPY", "¥", "Japanese Yen", 0.0067, 0, ("JP",)),
        UnitDefinition("CNY", "CN¥", "Chinese Yuan", 0.14, 2, ("CN",)),
        UnitDefinition("INR", "₹", "Indian Rupee", 0.012, 2, ("IN",)),
        UnitDefinition("AUD", "A$", "Australian Dollar", 0.65, 2, ("AU",)),
        UnitDefinition("NZD", "NZ$", "New Zealand Dollar", 0.60, 2, ("NZ",)),
    ),
)


UNIT_GROUPS: dict[str, UnitGroup] = {
    group.type: group
    for group in (
        WEIGHT, HEIGHT, BODY_LENGTH, BODY_TEMPERATURE, ENERGY_FOOD,
        LENGTH, AREA, VOLUME, CONSTRUCTION_VOLUME, DENSITY, TEMPERATURE,
        CURRENCY,
    )
}


def get_unit_group(unit_type: str) -> UnitGroup | None:
    return UNIT_GROUPS.get(unit_type)
