"""Post ORM — a multilingual guide article.

Invariants:
    - slug_en is unique and non-nullable (seed idempotency key)
    - English columns for title/excerpt/content are non-nullable; es/pt may be null
    - views starts at 0
    - status is one of: DRAFT, PUBLISHED, ARCHIVED (core/domain_types.PostStatus)

Design Decisions:
    - Per-locale columns mirror the category tables; readers fall back to English per field
    - tags stored as JSON: a short list of strings, never queried by element
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from calcdeck.db.base import Base


class Post(Base):
    """Guide post, one row carrying every locale."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    slug_en: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    slug_es: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    slug_pt: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    title_en: Mapped[str] = mapped_column(String(300), nullable=False)
    title_es: Mapped[str | None] = mapped_column(String(300), nullable=True)
    title_pt: Mapped[str | None] = mapped_column(String(300), nullable=True)
    excerpt_en: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    excerpt_pt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_en: Mapped[str] = mapped_column(Text, nullable=False)
    content_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_pt: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title_en: Mapped[str] = mapped_column(String(400), nullable=False)
    meta_title_es: Mapped[str | None] = mapped_column(String(400), nullable=True)
    meta_title_pt: Mapped[str | None] = mapped_column(String(400), nullable=True)
    meta_description_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_description_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_description_pt: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    related_calculator: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("blog_categories.id"), nullable=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="DRAFT")
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    reading_time: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    category: Mapped["BlogCategory | None"] = relationship(
        "BlogCategory", back_populates="posts", lazy="selectin",
    )
