"""Request Dependencies — admin gate and locale resolution shared by routes.

Invariants:
    - require_admin compares the bearer token in constant time
    - An unset admin token rejects every admin request
    - Locale resolution order: explicit query/body value → Accept-Language → settings
"""

import secrets

from fastapi import Depends, Header

from calcdeck.config import Settings, get_settings
from calcdeck.core.domain_types import Locale
from calcdeck.core.errors import UnauthorizedError
from calcdeck.services.calculator_catalog import CalculatorCatalog, get_catalog


async def require_admin(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = settings.admin_api_token
    scheme, _, token = (authorization or "").partition(" ")
    if (
        not expected
        or scheme.lower() != "bearer"
        or not secrets.compare_digest(token.strip().encode(), expected.encode())
    ):
        raise UnauthorizedError()


def resolve_locale(
    explicit: str | None, accept_language: str | None, settings: Settings,
) -> Locale:
    default = Locale.from_tag(settings.default_locale)
    if explicit:
        return Locale.from_tag(explicit, default)
    return Locale.from_accept_language(accept_language, default)


async def request_locale(
    locale: str | None = None,
    accept_language: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> Locale:
    """Locale from ?locale=, then Accept-Language, then settings.default_locale."""
    return resolve_locale(locale, accept_language, settings)


def catalog_dependency() -> CalculatorCatalog:
    return get_catalog()
