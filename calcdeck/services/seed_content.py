"""Content Seeding — idempotent insert of blog categories and guide posts from YAML.

Usage:
    python -m calcdeck.services.seed_content

Invariants:
    - Idempotent: a category whose slug exists, or a post whose slug_en exists, is skipped
    - meta_title_<locale> = title + " | Calcdeck"; meta_description = excerpt
    - views starts at 0
    - One bad entry is reported in SeedReport.failed and never aborts the rest
    - The engine is created for the run and disposed afterwards (db/session.py)

Design Decisions:
    - Content lives in YAML under data/content/, validated by schemas/guide.py
    - Session factory is injected so tests can seed an in-memory database
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from calcdeck.config import get_settings
from calcdeck.core.domain_types import Locale, PostStatus
from calcdeck.db.session import scoped_session_factory
from calcdeck.infrastructure.observability import setup_logging
from calcdeck.models.blog_category import BlogCategory
from calcdeck.models.post import Post
from calcdeck.schemas.guide import BlogCategorySeed, GuideSeed

logger = logging.getLogger(__name__)

META_TITLE_SUFFIX = " | Calcdeck"
_POST_LOCALES = (Locale.EN, Locale.ES, Locale.PT)


@dataclass
class SeedReport:
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def merge(self, other: "SeedReport") -> "SeedReport":
        return SeedReport(
            created=self.created + other.created,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
        )


def load_yaml_list(path: Path) -> list[dict[str, Any]]:
    with Path(path).open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of entries")
    return data


def meta_title(title: str | None) -> str | None:
    return f"{title}{META_TITLE_SUFFIX}" if title else None


def build_post(seed: GuideSeed, category_id, published_at: datetime) -> Post:
    columns: dict[str, Any] = {}
    for locale in _POST_LOCALES:
        suffix = locale.value
        title = seed.title.get(locale)
        excerpt = seed.excerpt.get(locale)
        columns[f"slug_{suffix}"] = seed.slug.get(locale)
        columns[f"title_{suffix}"] = title
        columns[f"excerpt_{suffix}"] = excerpt
        columns[f"content_{suffix}"] = seed.content.get(locale)
        columns[f"meta_title_{suffix}"] = meta_title(title)
        columns[f"meta_description_{suffix}"] = excerpt
    return Post(
        **columns,
        featured_image=seed.featured_image,
        related_calculator=seed.related_calculator,
        tags=list(seed.tags),
        category_id=category_id,
        status=seed.status.value,
        published_at=published_at if seed.status == PostStatus.PUBLISHED else None,
        reading_time=seed.reading_time,
        views=0,
    )


async def seed_blog_categories(
    db: AsyncSession, entries: list[dict[str, Any]],
) -> SeedReport:
    report = SeedReport()
    for raw in entries:
        try:
            seed = BlogCategorySeed.model_validate(raw)
        except ValidationError as e:
            slug = raw.get("slug", "<unknown>") if isinstance(raw, dict) else "<unknown>"
            logger.error(f"Invalid blog category {slug}: {e}", extra={"slug": slug})
            report.failed.append(str(slug))
            continue
        existing = await db.execute(
            select(BlogCategory.id).where(BlogCategory.slug == seed.slug),
        )
        if existing.scalar_one_or_none() is not None:
            logger.info(f"Skipped (exists): category {seed.slug}", extra={"slug": seed.slug})
            report.skipped.append(seed.slug)
            continue
        db.add(BlogCategory(
            slug=seed.slug,
            name_en=seed.name.en,
            name_es=seed.name.es,
            name_pt=seed.name.pt,
            description_en=seed.description.en,
            description_es=seed.description.es,
            description_pt=seed.description.pt,
            sort_order=seed.sort_order,
        ))
        await db.flush()
        logger.info(f"Created: category {seed.slug}", extra={"slug": seed.slug})
        report.created.append(seed.slug)
    await db.commit()
    return report


async def seed_posts(
    db: AsyncSession,
    entries: list[dict[str, Any]],
    published_at: datetime | None = None,
) -> SeedReport:
    """Insert guide posts, skipping any whose English slug already exists."""
    report = SeedReport()
    published_at = published_at or datetime.now(timezone.utc)
    categories = {
        slug: category_id
        for slug, category_id in (await db.execute(
            select(BlogCategory.slug, BlogCategory.id),
        )).all()
    }

    for raw in entries:
        try:
            seed = GuideSeed.model_validate(raw)
        except ValidationError as e:
            slug = _raw_slug(raw)
            logger.error(f"Invalid guide {slug}: {e}", extra={"slug": slug})
            report.failed.append(slug)
            continue

        slug = seed.slug.en
        if seed.category not in categories:
            logger.error(
                f"Guide {slug} references unknown category '{seed.category}'",
                extra={"slug": slug},
            )
            report.failed.append(slug)
            continue

        existing = await db.execute(select(Post.id).where(Post.slug_en == slug))
        if existing.scalar_one_or_none() is not None:
            logger.info(f"Skipped (exists): {slug}", extra={"slug": slug})
            report.skipped.append(slug)
            continue

        db.add(build_post(seed, categories[seed.category], published_at))
        await db.flush()
        logger.info(f"Created: {slug}", extra={"slug": slug})
        report.created.append(slug)

    await db.commit()
    return report


def _raw_slug(raw: Any) -> str:
    if isinstance(raw, dict):
        slug = raw.get("slug")
        if isinstance(slug, dict):
            return str(slug.get("en", "<unknown>"))
        if slug:
            return str(slug)
    return "<unknown>"


async def seed_content(
    session_factory: async_sessionmaker[AsyncSession], content_dir: Path,
) -> SeedReport:
    """Seed categories first, then posts, each in its own session."""
    content_dir = Path(content_dir)
    async with session_factory() as db:
        categories = await seed_blog_categories(
            db, load_yaml_list(content_dir / "blog_categories.yaml"),
        )
    async with session_factory() as db:
        posts = await seed_posts(db, load_yaml_list(content_dir / "guides.yaml"))
    report = categories.merge(posts)
    logger.info(
        f"Seeding complete: {len(report.created)} created, "
        f"{len(report.skipped)} skipped, {len(report.failed)} failed",
        extra={"created": len(report.created), "skipped": len(report.skipped)},
    )
    return report


async def main(
    database_url: str | None = None, content_dir: Path | None = None,
) -> SeedReport:
    settings = get_settings()
    async with scoped_session_factory(database_url or settings.database_url) as factory:
        return await seed_content(factory, content_dir or settings.content_dir)


if __name__ == "__main__":
    _settings = get_settings()
    setup_logging(_settings.log_level, _settings.log_format)
    result = asyncio.run(main())
    raise SystemExit(1 if result.failed else 0)
