"""Guide Routes — published guide posts in the caller's locale."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from calcdeck.api.dependencies import request_locale
from calcdeck.core.domain_types import Locale
from calcdeck.infrastructure.database import get_db
from calcdeck.schemas.guide import GuideDetail, GuideSummary
from calcdeck.services.guide_content import get_published, list_published

router = APIRouter(prefix="/api/v1/guides", tags=["guides"])


@router.get("", response_model=list[GuideSummary])
async def list_guides(
    locale: Locale = Depends(request_locale), db: AsyncSession = Depends(get_db),
):
    return await list_published(db, locale)


@router.get("/{slug}", response_model=GuideDetail)
async def get_guide(
    slug: str,
    locale: Locale = Depends(request_locale),
    db: AsyncSession = Depends(get_db),
):
    return await get_published(db, slug, locale)
