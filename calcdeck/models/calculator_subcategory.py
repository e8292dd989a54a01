"""CalculatorSubcategory ORM — second-level grouping under a CalculatorCategory.

Invariants:
    - Always belongs to a CalculatorCategory (category_id FK)
    - slug is unique across all subcategories
    - Lists are ordered by sort_order, then name_en
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from calcdeck.db.base import Base


class CalculatorSubcategory(Base):
    """Calculator subcategory, e.g. loans under finance."""
    __tablename__ = "calculator_subcategories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("calculator_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name_en: Mapped[str] = mapped_column(String(200), nullable=False)
    name_es: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_pt: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_fr: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_de: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    category: Mapped["CalculatorCategory"] = relationship(
        "CalculatorCategory", back_populates="subcategories",
    )
