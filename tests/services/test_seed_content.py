"""Content Seeding — idempotent insert of blog categories and guide posts.

Invariants:
    - Second run creates nothing and skips everything
    - meta_title = title + " | Calcdeck", meta_description = excerpt
    - views start at 0, published posts get published_at
    - A post with an unknown category or an invalid entry is reported, not fatal
"""

from datetime import datetime, timezone

from sqlalchemy import func, select

from calcdeck.config import get_settings
from calcdeck.models.blog_category import BlogCategory
from calcdeck.models.post import Post
from calcdeck.services.seed_content import (
    load_yaml_list, meta_title, seed_blog_categories, seed_content, seed_posts,
)


def _guide(slug="test-guide", category="guides", **overrides):
    entry = {
        "slug": {"en": slug},
        "title": {"en": "Test Guide", "es": "Guía de prueba"},
        "excerpt": {"en": "Short excerpt"},
        "content": {"en": "Body"},
        "category": category,
        "tags": [" finance ", ""],
    }
    entry.update(overrides)
    return entry


async def _seed_categories(db):
    await seed_blog_categories(db, [
        {"slug": "guides", "name": {"en": "Guides"}},
    ])


# --- Shipped content ---


async def test_seed_shipped_content(test_session_factory, test_db):
    report = await seed_content(test_session_factory, get_settings().content_dir)
    assert report.failed == []
    assert "complete-guide-compound-interest" in report.created
    count = await test_db.scalar(select(func.count()).select_from(Post))
    assert count == len(load_yaml_list(get_settings().content_dir / "guides.yaml"))
    assert set(report.created) - {"guides", "tips"} == {
        "complete-guide-budgeting-beginners",
        "complete-guide-compound-interest",
        "complete-guide-retirement-planning",
        "first-time-homebuyer-complete-guide",
        "ultimate-guide-weight-loss",
    }


async def test_seed_is_idempotent(test_session_factory, test_db):
    content_dir = get_settings().content_dir
    first = await seed_content(test_session_factory, content_dir)
    second = await seed_content(test_session_factory, content_dir)
    assert second.created == []
    assert sorted(second.skipped) == sorted(first.created)
    categories = await test_db.scalar(select(func.count()).select_from(BlogCategory))
    assert categories == 2


# --- Post fields ---


async def test_post_fields(test_db):
    await _seed_categories(test_db)
    published_at = datetime(2026, 1, 15, tzinfo=timezone.utc)
    report = await seed_posts(test_db, [_guide()], published_at=published_at)
    assert report.created == ["test-guide"]

    post = (await test_db.execute(select(Post).where(Post.slug_en == "test-guide"))).scalar_one()
    assert post.meta_title_en == "Test Guide | Calcdeck"
    assert post.meta_title_es == "Guía de prueba | Calcdeck"
    assert post.meta_title_pt is None
    assert post.meta_description_en == "Short excerpt"
    assert post.views == 0
    assert post.status == "PUBLISHED"
    assert post.published_at is not None
    assert post.tags == ["finance"]


async def test_draft_has_no_published_at(test_db):
    await _seed_categories(test_db)
    await seed_posts(test_db, [_guide(status="DRAFT")])
    post = (await test_db.execute(select(Post))).scalar_one()
    assert post.status == "DRAFT"
    assert post.published_at is None


def test_meta_title():
    assert meta_title("Budgeting 101") == "Budgeting 101 | Calcdeck"
    assert meta_title(None) is None


# --- Failures ---


async def test_unknown_category_reported(test_db):
    await _seed_categories(test_db)
    report = await seed_posts(test_db, [_guide(category="recipes"), _guide(slug="ok-guide")])
    assert report.failed == ["test-guide"]
    assert report.created == ["ok-guide"]


async def test_invalid_entry_reported(test_db):
    await _seed_categories(test_db)
    broken = _guide(slug="broken")
    del broken["title"]
    report = await seed_posts(test_db, [broken])
    assert report.failed == ["broken"]
    assert report.created == []


async def test_invalid_category_entry_reported(test_db):
    report = await seed_blog_categories(test_db, [{"slug": "nameless"}])
    assert report.failed == ["nameless"]
