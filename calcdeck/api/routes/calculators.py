"""Calculator Routes — catalog listing, definitions, evaluation and sensitivity.

Invariants:
    - Lookups accept the calculator id or any localized slug
    - Evaluation never raises for incomplete input: isValid=false comes back as 200
    - Body locale beats query locale, which beats Accept-Language

Design Decisions:
    - Thin handlers: all work happens in services/calculator_catalog.py
"""

import logging

from fastapi import APIRouter, Depends, Header

from calcdeck.api.dependencies import catalog_dependency, request_locale, resolve_locale
from calcdeck.config import Settings, get_settings
from calcdeck.core.domain_types import Locale
from calcdeck.schemas.calculator import EvaluateRequest, SensitivityRequest
from calcdeck.services.calculator_catalog import CalculatorCatalog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/calculators", tags=["calculators"])


def _body_locale(
    body: EvaluateRequest, query_locale: str | None,
    accept_language: str | None, settings: Settings,
) -> Locale:
    return resolve_locale(body.locale or query_locale, accept_language, settings)


@router.get("")
async def list_calculators(
    locale: Locale = Depends(request_locale),
    catalog: CalculatorCatalog = Depends(catalog_dependency),
):
    """Every calculator with its localized name, slug and subtitle."""
    return {
        "locale": locale.value,
        "calculators": catalog.list_summaries(locale),
    }


@router.get("/{id_or_slug}")
async def get_calculator(
    id_or_slug: str,
    locale: Locale = Depends(request_locale),
    catalog: CalculatorCatalog = Depends(catalog_dependency),
):
    """Full definition with text merged for the requested locale."""
    return catalog.describe(catalog.get(id_or_slug), locale)


@router.post("/{id_or_slug}/evaluate")
async def evaluate_calculator(
    id_or_slug: str,
    body: EvaluateRequest,
    locale: str | None = None,
    accept_language: str | None = Header(None),
    settings: Settings = Depends(get_settings),
    catalog: CalculatorCatalog = Depends(catalog_dependency),
):
    """Run the calculator on the submitted form state."""
    config = catalog.get(id_or_slug)
    resolved = _body_locale(body, locale, accept_language, settings)
    return catalog.evaluate(config, body.values, body.units, resolved)


@router.post("/{id_or_slug}/sensitivity")
async def calculator_sensitivity(
    id_or_slug: str,
    body: SensitivityRequest,
    locale: str | None = None,
    accept_language: str | None = Header(None),
    settings: Settings = Depends(get_settings),
    catalog: CalculatorCatalog = Depends(catalog_dependency),
):
    """Sweep one input ±range% and report one result per step."""
    config = catalog.get(id_or_slug)
    resolved = _body_locale(body, locale, accept_language, settings)
    return catalog.sensitivity(
        config, body.values, body.units, resolved,
        input_id=body.input_id,
        result_id=body.result_id,
        steps=body.steps,
        range_percent=body.range_percent,
    )
