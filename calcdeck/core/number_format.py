"""Number Formatting — locale-aware display strings for canonical values.

Invariants:
    - This is the only place values are rounded (half-up, via Decimal)
    - Negative zero never renders as "-0"
    - Separators come from the Locale, never from the process locale
    - Pure: no IO, no global state

Design Decisions:
    - Hand-built separators over the `locale` module: setlocale() is process-global
      and unsafe under concurrent requests
    - Currency symbols read from the unit registry so display and conversion agree
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from calcdeck.core.domain_types import Locale
from calcdeck.core.unit_registry import CURRENCY

_NARROW_NBSP = " "

# (thousands separator, decimal separator)
_SEPARATORS: dict[Locale, tuple[str, str]] = {
    Locale.EN: (",", "."),
    Locale.ES: (".", ","),
    Locale.PT: (".", ","),
    Locale.FR: (_NARROW_NBSP, ","),
    Locale.DE: (".", ","),
}

PLACEHOLDER = "—"


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round like a person would (2.5 → 3), independent of float representation."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    rounded = float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    return 0.0 if rounded == 0 else rounded


def format_number(
    value: float, decimals: int = 0, locale: Locale = Locale.EN,
) -> str:
    """Group thousands and fix decimals, e.g. 1234.5 → "1,234.50" (en)."""
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    rounded = round_half_up(value, decimals)
    text = f"{abs(rounded):,.{decimals}f}"
    thousands, decimal_sep = _SEPARATORS.get(locale, _SEPARATORS[Locale.EN])
    text = text.replace(",", "\0").replace(".", decimal_sep).replace("\0", thousands)
    return f"-{text}" if rounded < 0 else text


def format_signed(
    value: float, decimals: int = 0, locale: Locale = Locale.EN,
) -> str:
    """Like format_number but always carries a sign for non-zero values."""
    text = format_number(value, decimals, locale)
    if round_half_up(value, decimals) > 0:
        return f"+{text}"
    return text


def currency_symbol(code: str | None) -> str:
    """Display symbol for an ISO code (case-insensitive); unknown codes fall back to "$"."""
    if not code:
        return "$"
    unit = CURRENCY.find(code.upper())
    return unit.symbol if unit else "$"


def format_currency(
    amount: float,
    code: str | None = "USD",
    locale: Locale = Locale.EN,
    decimals: int = 0,
    compact: bool = False,
) -> str:
    """Prefix the currency symbol; compact mode abbreviates millions ("$1.23M")."""
    if amount is None or not math.isfinite(amount):
        return PLACEHOLDER
    symbol = currency_symbol(code)
    sign = "-" if round_half_up(amount, decimals) < 0 else ""
    if compact and abs(amount) >= 1_000_000:
        return f"{sign}{symbol}{format_number(abs(amount) / 1_000_000, 2, locale)}M"
    return f"{sign}{symbol}{format_number(abs(amount), decimals, locale)}"


def format_percent(
    value: float, decimals: int = 1, locale: Locale = Locale.EN,
) -> str:
    """Format an already-scaled percentage: 7.229 → "7.23%" with decimals=2."""
    return f"{format_number(value, decimals, locale)}%"
