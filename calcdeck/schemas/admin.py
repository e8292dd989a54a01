"""Admin Schemas — create/response models for calculator categories and subcategories.

Invariants:
    - slug: lowercase letters, digits and hyphens, 1-100 chars
    - name_en is required and non-blank; other locales optional
    - Blank optional names are stored as null

Design Decisions:
    - Missing or malformed fields surface as 400 through the validation error handler
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class _LocalizedNames(BaseModel):
    slug: str = Field(min_length=1, max_length=100, pattern=_SLUG_PATTERN)
    name_en: str = Field(min_length=1, max_length=200)
    name_es: str | None = Field(None, max_length=200)
    name_pt: str | None = Field(None, max_length=200)
    name_fr: str | None = Field(None, max_length=200)
    name_de: str | None = Field(None, max_length=200)
    sort_order: int = 0

    @field_validator("name_en")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name_en cannot be empty or whitespace")
        return v

    @field_validator("name_es", "name_pt", "name_fr", "name_de")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class CalculatorCategoryCreate(_LocalizedNames):
    description: str | None = Field(None, max_length=2000)
    icon: str | None = Field(None, max_length=50)
    color: str = Field("blue", max_length=20)


class CalculatorCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name_en: str
    name_es: str | None = None
    name_pt: str | None = None
    name_fr: str | None = None
    name_de: str | None = None
    description: str | None = None
    icon: str | None = None
    color: str
    is_active: bool
    sort_order: int


class CalculatorSubcategoryCreate(_LocalizedNames):
    category_id: UUID
    is_active: bool = True


class CalculatorSubcategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID
    slug: str
    name_en: str
    name_es: str | None = None
    name_pt: str | None = None
    name_fr: str | None = None
    name_de: str | None = None
    sort_order: int
    is_active: bool
    created_at: datetime
