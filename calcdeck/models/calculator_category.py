"""CalculatorCategory ORM — top-level grouping shown in menus and on the home page.

Invariants:
    - slug is unique and non-nullable
    - name_en is non-nullable; other locales may be null and fall back to English
    - Deleting a category deletes its subcategories

Design Decisions:
    - One column per locale (name_en, name_es, ...) instead of a translations table:
      the locale set is small and fixed
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from calcdeck.db.base import Base


class CalculatorCategory(Base):
    """Calculator category, e.g. finance or health."""
    __tablename__ = "calculator_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name_en: Mapped[str] = mapped_column(String(200), nullable=False)
    name_es: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_pt: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_fr: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_de: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="blue")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_in_menu: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    subcategories: Mapped[list["CalculatorSubcategory"]] = relationship(
        "CalculatorSubcategory", back_populates="category",
        cascade="all, delete-orphan",
    )
