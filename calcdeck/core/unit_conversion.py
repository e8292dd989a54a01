"""Unit Conversion — pure conversions through each group's canonical base unit.

Invariants:
    - Every conversion goes value → base → target; no pairwise tables
    - No rounding here: callers round at the formatting boundary
    - Unknown group or unit raises UnknownUnitError (never NaN, never a silent 0)
    - convert_from_base(convert_to_base(v, u), u) == v within float tolerance

Design Decisions:
    - Raise instead of returning a sentinel: evaluators catch UnknownUnitError in one
      place (EvaluationRequest.number_in_base) and turn it into invalid input
"""

from typing import Mapping

from calcdeck.core.errors import UnknownUnitError
from calcdeck.core.unit_registry import UnitDefinition, UnitGroup, get_unit_group


def _resolve(unit_id: str, unit_type: str) -> tuple[UnitGroup, UnitDefinition]:
    group = get_unit_group(unit_type)
    if group is None:
        raise UnknownUnitError(unit_id, unit_type)
    unit = group.find(unit_id)
    if unit is None:
        raise UnknownUnitError(unit_id, unit_type)
    return group, unit


def convert_to_base(value: float, unit_id: str, unit_type: str) -> float:
    """Convert a scalar in unit_id to the group's base unit."""
    _, unit = _resolve(unit_id, unit_type)
    if unit.to_base_fn is not None:
        return unit.to_base_fn(value)
    if unit.dual is not None:
        # A bare number in a dual unit is already expressed in base units
        return value
    return value * unit.to_base


def convert_from_base(value: float, unit_id: str, unit_type: str) -> float:
    """Convert a scalar in the base unit to unit_id."""
    _, unit = _resolve(unit_id, unit_type)
    if unit.from_base_fn is not None:
        return unit.from_base_fn(value)
    if unit.dual is not None:
        return value
    return value / unit.to_base


def convert(value: float, from_unit: str, to_unit: str, unit_type: str) -> float:
    """Convert between two units of the same group."""
    if from_unit == to_unit:
        _resolve(from_unit, unit_type)
        return value
    return convert_from_base(
        convert_to_base(value, from_unit, unit_type), to_unit, unit_type,
    )


def convert_dual_to_base(
    value: Mapping[str, float], unit_id: str, unit_type: str,
) -> float:
    """Convert a {"primary": ..., "secondary": ...} pair to base units."""
    _, unit = _resolve(unit_id, unit_type)
    if unit.dual is None:
        raise UnknownUnitError(unit_id, unit_type)
    primary = float(value.get("primary") or 0)
    secondary = float(value.get("secondary") or 0)
    return primary * unit.dual.primary_to_base + secondary * unit.dual.secondary_to_base


def convert_base_to_dual(value: float, unit_id: str, unit_type: str) -> dict[str, float]:
    """Split a base value into whole primary units plus a secondary remainder."""
    _, unit = _resolve(unit_id, unit_type)
    if unit.dual is None:
        raise UnknownUnitError(unit_id, unit_type)
    total_secondary = value / unit.dual.secondary_to_base
    per_primary = unit.dual.primary_to_base / unit.dual.secondary_to_base
    primary = int(total_secondary // per_primary)
    secondary = total_secondary - primary * per_primary
    return {"primary": float(primary), "secondary": secondary}


def is_dual_unit(unit_id: str, unit_type: str) -> bool:
    group = get_unit_group(unit_type)
    unit = group.find(unit_id) if group else None
    return unit is not None and unit.dual is not None


def unit_decimals(unit_id: str, unit_type: str) -> int:
    """Display precision for a unit (used only when formatting)."""
    _, unit = _resolve(unit_id, unit_type)
    return unit.decimals


def unit_symbol(unit_id: str, unit_type: str) -> str:
    _, unit = _resolve(unit_id, unit_type)
    return unit.symbol


_IMPERIAL_COUNTRIES = frozenset({"US", "LR", "MM"})
_UK_COUNTRIES = frozenset({"GB", "IE"})


def guess_default_unit(unit_type: str, locale_tag: str) -> str:
    """Pick a sensible unit for a locale tag like "en-US" or "pt-BR".

    A unit whose regions list the tag's country wins (first in group order).
    Otherwise imperial countries get the first imperial-region unit and
    everyone else gets the base unit.
    """
    group = get_unit_group(unit_type)
    if group is None:
        raise UnknownUnitError("", unit_type)
    parts = locale_tag.replace("_", "-").split("-")
    country = parts[1].upper() if len(parts) > 1 else ""

    for unit in group.units:
        if country and country in unit.regions:
            return unit.id

    if country in _IMPERIAL_COUNTRIES or country in _UK_COUNTRIES:
        for unit in group.units:
            if "US" in unit.regions or "GB" in unit.regions:
                return unit.id
    return group.base_unit
