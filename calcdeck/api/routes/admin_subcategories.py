"""Admin Calculator Subcategories — list and create subcategories under a category.

Invariants:
    - Every endpoint requires the admin bearer token (401 otherwise)
    - Missing or malformed fields → 400 VALIDATION_ERROR
    - Unknown parent category → 404
    - Duplicate slug → 400 DUPLICATE_RESOURCE ("A subcategory with this slug already exists")
    - List is ordered by sort_order, then name_en; ?category_id= narrows it
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from calcdeck.api.dependencies import require_admin
from calcdeck.core.errors import DuplicateResourceError, ResourceNotFoundError
from calcdeck.infrastructure.database import get_db
from calcdeck.models.calculator_category import CalculatorCategory
from calcdeck.models.calculator_subcategory import CalculatorSubcategory
from calcdeck.schemas.admin import CalculatorSubcategoryCreate, CalculatorSubcategoryResponse

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/admin/calculator-subcategories",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[CalculatorSubcategoryResponse])
async def list_subcategories(
    category_id: UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = select(CalculatorSubcategory).order_by(
        CalculatorSubcategory.sort_order, CalculatorSubcategory.name_en,
    )
    if category_id is not None:
        query = query.where(CalculatorSubcategory.category_id == category_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.post(
    "", response_model=CalculatorSubcategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_subcategory(
    body: CalculatorSubcategoryCreate, db: AsyncSession = Depends(get_db),
):
    parent = await db.get(CalculatorCategory, body.category_id)
    if parent is None:
        raise ResourceNotFoundError("Category", str(body.category_id))

    existing = await db.execute(
        select(CalculatorSubcategory.id).where(CalculatorSubcategory.slug == body.slug),
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateResourceError("Subcategory", "slug", body.slug)

    subcategory = CalculatorSubcategory(**body.model_dump())
    db.add(subcategory)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError("Subcategory", "slug", body.slug)
    await db.refresh(subcategory)
    logger.info(
        f"Created calculator subcategory {subcategory.slug}",
        extra={"slug": subcategory.slug},
    )
    return subcategory
