"""Locale Routes — list and configure the locales content is kept in sync across."""

from fastapi import APIRouter, Depends, status

from localesync.api.dependencies import get_locale_service
from localesync.infrastructure.locale_service import SqlLocaleService
from localesync.schemas.content import LocaleCreate, LocaleResponse

router = APIRouter(prefix="/api/v1/locales", tags=["locales"])


@router.get("", response_model=list[LocaleResponse])
async def list_configured_locales(
    locales: SqlLocaleService = Depends(get_locale_service),
):
    return await locales.find()


@router.post(
    "", response_model=LocaleResponse, status_code=status.HTTP_201_CREATED,
)
async def create_locale(
    body: LocaleCreate, locales: SqlLocaleService = Depends(get_locale_service),
):
    """Add a locale. Existing entries are not back-filled for it."""
    return await locales.create(body.code, body.name, body.is_default)
