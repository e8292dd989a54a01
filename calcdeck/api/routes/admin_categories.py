"""Admin Calculator Categories — list and create top-level calculator categories.

Invariants:
    - Every endpoint requires the admin bearer token (401 otherwise)
    - Duplicate slug → 400 DUPLICATE_RESOURCE, checked before insert and on commit
    - List is ordered by sort_order, then name_en
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from calcdeck.api.dependencies import require_admin
from calcdeck.core.errors import DuplicateResourceError
from calcdeck.infrastructure.database import get_db
from calcdeck.models.calculator_category import CalculatorCategory
from calcdeck.schemas.admin import CalculatorCategoryCreate, CalculatorCategoryResponse

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/admin/calculator-categories",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[CalculatorCategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(CalculatorCategory).order_by(
            CalculatorCategory.sort_order, CalculatorCategory.name_en,
        ),
    )
    return result.scalars().all()


@router.post(
    "", response_model=CalculatorCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CalculatorCategoryCreate, db: AsyncSession = Depends(get_db),
):
    existing = await db.execute(
        select(CalculatorCategory.id).where(CalculatorCategory.slug == body.slug),
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateResourceError("Category", "slug", body.slug)

    category = CalculatorCategory(**body.model_dump())
    db.add(category)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError("Category", "slug", body.slug)
    await db.refresh(category)
    logger.info(f"Created calculator category {category.slug}", extra={"slug": category.slug})
    return category
