"""Guide Content — published posts read back in one locale with English fallback.

Invariants:
    - Only PUBLISHED posts are visible
    - Each localized field falls back to English on its own (a Spanish title with
      an English body is a valid response)
    - A post is found by its slug in any stored locale
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from calcdeck.core.domain_types import Locale, PostStatus
from calcdeck.core.errors import ErrorContext, ResourceNotFoundError
from calcdeck.models.post import Post
from calcdeck.schemas.guide import GuideDetail, GuideSummary

logger = logging.getLogger(__name__)

_STORED_LOCALES = (Locale.EN, Locale.ES, Locale.PT)


def localized(post: Post, field_name: str, locale: Locale) -> str | None:
    """Column value for the locale, or the English column when it is empty."""
    if locale in _STORED_LOCALES and locale != Locale.EN:
        value = getattr(post, f"{field_name}_{locale.value}")
        if value:
            return value
    return getattr(post, f"{field_name}_en")


def to_summary(post: Post, locale: Locale) -> GuideSummary:
    return GuideSummary(
        slug=localized(post, "slug", locale),
        locale=locale,
        title=localized(post, "title", locale),
        excerpt=localized(post, "excerpt", locale),
        category=post.category.slug if post.category else None,
        featured_image=post.featured_image,
        related_calculator=post.related_calculator,
        tags=list(post.tags or []),
        reading_time=post.reading_time,
        published_at=post.published_at,
    )


def to_detail(post: Post, locale: Locale) -> GuideDetail:
    return GuideDetail(
        **to_summary(post, locale).model_dump(),
        content=localized(post, "content", locale),
        meta_title=localized(post, "meta_title", locale),
        meta_description=localized(post, "meta_description", locale),
        views=post.views,
    )


async def list_published(db: AsyncSession, locale: Locale) -> list[GuideSummary]:
    result = await db.execute(
        select(Post)
        .where(Post.status == PostStatus.PUBLISHED.value)
        .order_by(Post.published_at.desc(), Post.slug_en),
    )
    return [to_summary(post, locale) for post in result.scalars().all()]


async def get_published(db: AsyncSession, slug: str, locale: Locale) -> GuideDetail:
    result = await db.execute(
        select(Post).where(
            Post.status == PostStatus.PUBLISHED.value,
            or_(Post.slug_en == slug, Post.slug_es == slug, Post.slug_pt == slug),
        ),
    )
    post = result.scalars().first()
    if post is None:
        raise ResourceNotFoundError("Guide", slug, ErrorContext(locale=locale.value))
    logger.debug(f"Serving guide {post.slug_en}", extra={"slug": slug, "locale": locale.value})
    return to_detail(post, locale)
