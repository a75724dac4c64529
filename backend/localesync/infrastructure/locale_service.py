"""SQL Locale Service — configured locales stored in the i18n_locale table.

Invariants:
    - find() returns locales in insertion order (by id)
    - Codes are unique; creating a duplicate raises DuplicateLocaleError
    - Marking a locale as default clears the flag on every other locale
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localesync.core.errors import DatabaseError, DuplicateLocaleError
from localesync.models.locale import Locale

logger = logging.getLogger(__name__)


def _to_dict(locale: Locale) -> dict:
    return {
        "id": locale.id,
        "code": locale.code,
        "name": locale.name,
        "is_default": locale.is_default,
    }


class SqlLocaleService:
    """Locale configuration backed by the database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self) -> list[dict]:
        try:
            result = await self.db.execute(select(Locale).order_by(Locale.id))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to read locales: {e}")
            raise DatabaseError(type(e).__name__, "find_locales") from e
        return [_to_dict(locale) for locale in result.scalars().all()]

    async def create(
        self, code: str, name: str | None = None, is_default: bool = False,
    ) -> dict:
        try:
            existing = await self.db.execute(select(Locale).where(Locale.code == code))
            if existing.scalar_one_or_none() is not None:
                raise DuplicateLocaleError(code)
            if is_default:
                await self.db.execute(
                    update(Locale).where(Locale.is_default.is_(True))
                    .values(is_default=False),
                )
            locale = Locale(code=code, name=name or code, is_default=is_default)
            self.db.add(locale)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create locale {code}: {e}", extra={"locale": code})
            raise DatabaseError(type(e).__name__, "create_locale") from e
        logger.info(f"Locale {code} configured", extra={"locale": code})
        return _to_dict(locale)
