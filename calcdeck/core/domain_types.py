"""Domain Types — enums and identity wrappers shared across the calculator core.

Invariants:
    - CalculatorId wraps the config identifier ("calorie", "compound-interest", ...)
    - All valid states encoded as Enums — no raw string matching in evaluators
    - Locale.from_tag() is total: unknown tags resolve to the fallback locale

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and load straight from YAML
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CalculatorId = NewType("CalculatorId", str)
UnitId = NewType("UnitId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Locale(str, Enum):
    """Supported content locales. EN is the single fallback locale."""
    EN = "en"
    ES = "es"
    PT = "pt"
    FR = "fr"
    DE = "de"

    @classmethod
    def from_tag(cls, tag: str | None, default: "Locale | None" = None) -> "Locale":
        """Resolve a BCP-47-ish tag ("pt-BR", "es_MX", "EN") to a Locale."""
        fallback = default or FALLBACK_LOCALE
        if not tag:
            return fallback
        primary = tag.strip().replace("_", "-").split("-")[0].lower()
        try:
            return cls(primary)
        except ValueError:
            return fallback

    @classmethod
    def from_accept_language(
        cls, header: str | None, default: "Locale | None" = None,
    ) -> "Locale":
        """Pick the highest-weighted supported language from an Accept-Language header."""
        fallback = default or FALLBACK_LOCALE
        if not header:
            return fallback
        candidates: list[tuple[float, int, str]] = []
        for position, part in enumerate(header.split(",")):
            pieces = part.strip().split(";")
            tag = pieces[0].strip()
            weight = 1.0
            for param in pieces[1:]:
                name, _, value = param.strip().partition("=")
                if name == "q":
                    try:
                        weight = float(value)
                    except ValueError:
                        weight = 0.0
            if tag and weight > 0:
                candidates.append((-weight, position, tag))
        for _, _, tag in sorted(candidates):
            primary = tag.replace("_", "-").split("-")[0].lower()
            if primary in _LOCALE_VALUES:
                return cls(primary)
        return fallback


FALLBACK_LOCALE = Locale.EN
_LOCALE_VALUES = frozenset(locale.value for locale in Locale)


class InputType(str, Enum):
    """Widget kinds an input definition can declare."""
    NUMBER = "number"
    SLIDER = "slider"
    SELECT = "select"
    RADIO = "radio"
    TOGGLE = "toggle"
    CHECKBOX = "checkbox"


class ResultType(str, Enum):
    """Display prominence of a result slot."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BADGE = "badge"


class ResultFormat(str, Enum):
    """How the rendering layer should treat a result's formatted string."""
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    TEXT = "text"


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"


class PostStatus(str, Enum):
    """Guide post lifecycle — maps to DB `status` column."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"
