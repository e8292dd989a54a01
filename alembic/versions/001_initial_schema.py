"""Initial schema — calculator categories, subcategories, blog categories, posts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _locale_names(length: int = 200) -> list[sa.Column]:
    return [
        sa.Column("name_en", sa.String(length), nullable=False),
        sa.Column("name_es", sa.String(length), nullable=True),
        sa.Column("name_pt", sa.String(length), nullable=True),
        sa.Column("name_fr", sa.String(length), nullable=True),
        sa.Column("name_de", sa.String(length), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "calculator_categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        *_locale_names(),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("color", sa.String(20), nullable=False, server_default="blue"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("show_in_menu", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "calculator_subcategories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "category_id", UUID(as_uuid=True),
            sa.ForeignKey("calculator_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        *_locale_names(),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_calculator_subcategories_category_id",
        "calculator_subcategories", ["category_id"],
    )

    op.create_table(
        "blog_categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_es", sa.String(200), nullable=True),
        sa.Column("name_pt", sa.String(200), nullable=True),
        sa.Column("description_en", sa.Text, nullable=True),
        sa.Column("description_es", sa.Text, nullable=True),
        sa.Column("description_pt", sa.Text, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "posts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("slug_en", sa.String(200), nullable=False, unique=True),
        sa.Column("slug_es", sa.String(200), nullable=True),
        sa.Column("slug_pt", sa.String(200), nullable=True),
        sa.Column("title_en", sa.String(300), nullable=False),
        sa.Column("title_es", sa.String(300), nullable=True),
        sa.Column("title_pt", sa.String(300), nullable=True),
        sa.Column("excerpt_en", sa.Text, nullable=False),
        sa.Column("excerpt_es", sa.Text, nullable=True),
        sa.Column("excerpt_pt", sa.Text, nullable=True),
        sa.Column("content_en", sa.Text, nullable=False),
        sa.Column("content_es", sa.Text, nullable=True),
        sa.Column("content_pt", sa.Text, nullable=True),
        sa.Column("meta_title_en", sa.String(400), nullable=False),
        sa.Column("meta_title_es", sa.String(400), nullable=True),
        sa.Column("meta_title_pt", sa.String(400), nullable=True),
        sa.Column("meta_description_en", sa.Text, nullable=True),
        sa.Column("meta_description_es", sa.Text, nullable=True),
        sa.Column("meta_description_pt", sa.Text, nullable=True),
        sa.Column("featured_image", sa.String(500), nullable=True),
        sa.Column("related_calculator", sa.String(100), nullable=True),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("category_id", UUID(as_uuid=True), sa.ForeignKey("blog_categories.id"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reading_time", sa.Integer, nullable=False, server_default="5"),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_posts_slug_es", "posts", ["slug_es"])
    op.create_index("ix_posts_slug_pt", "posts", ["slug_pt"])


def downgrade() -> None:
    op.drop_index("ix_posts_slug_pt", table_name="posts")
    op.drop_index("ix_posts_slug_es", table_name="posts")
    op.drop_table("posts")
    op.drop_table("blog_categories")
    op.drop_index(
        "ix_calculator_subcategories_category_id", table_name="calculator_subcategories",
    )
    op.drop_table("calculator_subcategories")
    op.drop_table("calculator_categories")
