"""Request Schemas — body validation for evaluation, admin and seed entries.

Invariants:
    - Evaluation values are scalars or {primary, secondary} pairs
    - Locale must look like a language tag
    - Admin slugs are lowercase-hyphenated; name_en required, blank optional names → None
    - Guide seed tags are stripped and emptied entries dropped
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from calcdeck.core.domain_types import Locale, PostStatus
from calcdeck.schemas.admin import CalculatorCategoryCreate, CalculatorSubcategoryCreate
from calcdeck.schemas.calculator import EvaluateRequest, SensitivityRequest
from calcdeck.schemas.guide import GuideSeed, LocalizedField


# --- EvaluateRequest ----------------------------------------------------------

def test_evaluate_request_defaults():
    req = EvaluateRequest()
    assert req.values == {}
    assert req.units == {}
    assert req.locale is None


def test_evaluate_request_accepts_pairs():
    req = EvaluateRequest(values={"height": {"primary": 5, "secondary": 7}, "goal": "loss"})
    assert req.values["height"]["secondary"] == 7


def test_evaluate_request_rejects_unknown_pair_keys():
    with pytest.raises(ValidationError):
        EvaluateRequest(values={"height": {"feet": 5}})


def test_evaluate_request_rejects_lists():
    with pytest.raises(ValidationError):
        EvaluateRequest(values={"weight": [70, 80]})


@pytest.mark.parametrize("locale", ["en", "pt-BR", "es_MX", "zh-Hant-TW"])
def test_locale_tags_accepted(locale):
    assert EvaluateRequest(locale=locale).locale == locale


@pytest.mark.parametrize("locale", ["e", "english!", "12"])
def test_bad_locale_rejected(locale):
    with pytest.raises(ValidationError):
        EvaluateRequest(locale=locale)


# --- SensitivityRequest -------------------------------------------------------

def test_sensitivity_bounds():
    assert SensitivityRequest(steps=41, range_percent=100).steps == 41
    with pytest.raises(ValidationError):
        SensitivityRequest(steps=42)
    with pytest.raises(ValidationError):
        SensitivityRequest(range_percent=0)


# --- Admin schemas ------------------------------------------------------------

def test_category_defaults():
    body = CalculatorCategoryCreate(slug="home-garden", name_en=" Home & Garden ")
    assert body.name_en == "Home & Garden"
    assert body.color == "blue"
    assert body.sort_order == 0


@pytest.mark.parametrize("slug", ["Home", "home_garden", "-home", "home--garden", ""])
def test_bad_slugs_rejected(slug):
    with pytest.raises(ValidationError):
        CalculatorCategoryCreate(slug=slug, name_en="Home")


def test_subcategory_blank_names_become_none():
    body = CalculatorSubcategoryCreate(
        category_id=uuid4(), slug="loans", name_en="Loans", name_es="", name_de="  ",
    )
    assert body.name_es is None
    assert body.name_de is None
    assert body.is_active is True


def test_subcategory_requires_category():
    with pytest.raises(ValidationError):
        CalculatorSubcategoryCreate(slug="loans", name_en="Loans")


# --- Guide seed ---------------------------------------------------------------

def test_localized_field_get():
    field = LocalizedField(en="Hello", es="Hola")
    assert field.get(Locale.ES) == "Hola"
    assert field.get(Locale.PT) is None
    assert field.get(Locale.FR) is None


def test_guide_seed_defaults_and_tags():
    seed = GuideSeed(
        slug={"en": "a"}, title={"en": "A"}, excerpt={"en": "e"}, content={"en": "c"},
        category="tips", tags=[" mulch ", "  "],
    )
    assert seed.tags == ["mulch"]
    assert seed.status is PostStatus.PUBLISHED
    assert seed.reading_time == 5


def test_guide_seed_needs_english_title():
    with pytest.raises(ValidationError):
        GuideSeed(
            slug={"en": "a"}, title={"es": "A"}, excerpt={"en": "e"}, content={"en": "c"},
            category="tips",
        )
