"""Unit Routes — ad hoc conversion and locale-based default units.

Invariants:
    - Unknown unit or unit type → 400 UNKNOWN_UNIT (via UnknownUnitError)
    - Converted values are returned unrounded alongside the target unit's display precision
    - A dual target unit (ft_in, st_lb) also gets the whole/remainder split in `parts`
"""

from fastapi import APIRouter, Header, Query

from calcdeck.core.errors import UnknownUnitError
from calcdeck.core.unit_conversion import (
    convert, convert_base_to_dual, convert_to_base, guess_default_unit,
    is_dual_unit, unit_decimals, unit_symbol,
)
from calcdeck.core.unit_registry import get_unit_group

router = APIRouter(prefix="/api/v1/units", tags=["units"])


@router.get("/convert")
async def convert_units(
    value: float = Query(...),
    from_unit: str = Query(..., alias="from"),
    to_unit: str = Query(..., alias="to"),
    unit_type: str = Query(..., alias="type"),
):
    result = convert(value, from_unit, to_unit, unit_type)
    parts = (
        convert_base_to_dual(convert_to_base(value, from_unit, unit_type), to_unit, unit_type)
        if is_dual_unit(to_unit, unit_type) else None
    )
    return {
        "type": unit_type,
        "value": value,
        "from": from_unit,
        "to": to_unit,
        "result": result,
        "parts": parts,
        "decimals": unit_decimals(to_unit, unit_type),
        "symbol": unit_symbol(to_unit, unit_type),
    }


@router.get("/{unit_type}/default")
async def default_unit(
    unit_type: str,
    locale: str | None = None,
    accept_language: str | None = Header(None),
):
    """Suggested unit for a region, from ?locale=pt-BR or the Accept-Language header."""
    group = get_unit_group(unit_type)
    if group is None:
        raise UnknownUnitError("", unit_type)
    tag = locale or (accept_language or "").split(",")[0].split(";")[0].strip() or "en"
    return {
        "type": unit_type,
        "locale": tag,
        "unit": guess_default_unit(unit_type, tag),
        "units": list(group.unit_ids),
    }
