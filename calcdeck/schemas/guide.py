"""Guide Schemas — seed-file entries and localized API responses for guide posts.

Invariants:
    - Every localized mapping carries an English value (en is the fallback)
    - Localized responses never contain null title/excerpt/content: English fills gaps
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from calcdeck.core.domain_types import Locale, PostStatus, FALLBACK_LOCALE

_SEEDED_LOCALES = (Locale.EN, Locale.ES, Locale.PT)


class LocalizedField(BaseModel):
    en: str = Field(min_length=1)
    es: str | None = None
    pt: str | None = None

    def get(self, locale: Locale) -> str | None:
        return getattr(self, locale.value, None) if locale in _SEEDED_LOCALES else None


class OptionalLocalizedField(BaseModel):
    en: str | None = None
    es: str | None = None
    pt: str | None = None


class BlogCategorySeed(BaseModel):
    slug: str = Field(min_length=1, max_length=100)
    name: LocalizedField
    description: OptionalLocalizedField = OptionalLocalizedField()
    sort_order: int = 0


class GuideSeed(BaseModel):
    """One entry of content/guides.yaml."""
    slug: LocalizedField
    title: LocalizedField
    excerpt: LocalizedField
    content: LocalizedField
    featured_image: str | None = None
    related_calculator: str | None = None
    tags: list[str] = Field(default_factory=list)
    category: str
    reading_time: int = Field(5, ge=1)
    status: PostStatus = PostStatus.PUBLISHED

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag.strip()]


class GuideSummary(BaseModel):
    slug: str
    locale: Locale
    title: str
    excerpt: str
    category: str | None = None
    featured_image: str | None = None
    related_calculator: str | None = None
    tags: list[str] = Field(default_factory=list)
    reading_time: int
    published_at: datetime | None = None


class GuideDetail(GuideSummary):
    content: str
    meta_title: str
    meta_description: str | None = None
    views: int
    fallback_locale: Locale = FALLBACK_LOCALE
