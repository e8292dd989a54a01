"""Calculator Schemas — request bodies for evaluation and sensitivity endpoints.

Invariants:
    - values accepts numbers, strings, booleans, null and {primary, secondary} pairs
    - locale, when given, is a language tag; unsupported tags fall back at resolution time
    - Sensitivity overrides respect the same bounds as the YAML sensitivity block

Design Decisions:
    - Responses are plain dicts built by the catalog service (camelCase keys the
      frontend already consumes), so only requests get models here
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class EvaluateRequest(BaseModel):
    """Raw form state for one evaluation."""
    values: dict[str, Any] = Field(default_factory=dict)
    units: dict[str, str] = Field(default_factory=dict)
    locale: str | None = Field(None, max_length=35, pattern=r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$")

    @field_validator("values")
    @classmethod
    def check_value_shapes(cls, v: dict[str, Any]) -> dict[str, Any]:
        for key, value in v.items():
            if isinstance(value, dict):
                if not set(value) <= {"primary", "secondary"}:
                    raise ValueError(
                        f"'{key}' pair may only hold 'primary' and 'secondary'",
                    )
            elif isinstance(value, (list, tuple)):
                raise ValueError(f"'{key}' must be a scalar or a primary/secondary pair")
        return v


class SensitivityRequest(EvaluateRequest):
    """Evaluation input plus optional overrides for the sweep."""
    input_id: str | None = None
    result_id: str | None = None
    steps: int | None = Field(None, ge=3, le=41)
    range_percent: float | None = Field(None, gt=0, le=100)
