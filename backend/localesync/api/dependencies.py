"""Request Dependencies — per-request query engine, locale service and content service.

Invariants:
    - One AsyncSession per request, shared by the engine, the locale service
      and every lifecycle hook run during that request
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from localesync.config import get_settings
from localesync.infrastructure.content_types import (
    CARD_MUSICA_UID, CATEGORIA_DE_MUSICA_UID, CONTENT_TYPES,
)
from localesync.infrastructure.database import get_db
from localesync.infrastructure.locale_service import SqlLocaleService
from localesync.infrastructure.query_engine import SqlQueryEngine
from localesync.services.content_service import ContentService
from localesync.services.lifecycles import build_lifecycles

_SIBLING = {"select": ["id", "locale"]}

RESPONSE_POPULATE = {
    CARD_MUSICA_UID: {
        "localizations": _SIBLING,
        "categoria_de_musicas": {"select": ["id", "nome", "locale"]},
    },
    CATEGORIA_DE_MUSICA_UID: {"localizations": _SIBLING},
}

RELATION_TARGETS = {
    uid: {name: relation.target_uid for name, relation in spec.relations.items()}
    for uid, spec in CONTENT_TYPES.items()
}


def get_locale_service(db: AsyncSession = Depends(get_db)) -> SqlLocaleService:
    return SqlLocaleService(db)


def get_content_service(db: AsyncSession = Depends(get_db)) -> ContentService:
    engine = SqlQueryEngine(db)
    locale_service = SqlLocaleService(db)
    return ContentService(
        engine,
        locale_service,
        build_lifecycles(engine, locale_service, get_settings()),
        populate=RESPONSE_POPULATE,
        relations=RELATION_TARGETS,
    )
