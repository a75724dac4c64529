"""Content Type Registry — maps host uids to ORM tables and their relations.

Invariants:
    - Every uid used by the lifecycle bindings is registered here
    - A RelationSpec reads owner_column -> target_column on its link table
    - 'localizations' is a relation of a content type onto itself

Design Decisions:
    - Relation metadata lives beside the query engine, not on the models:
      the models stay plain tables and the engine stays generic
"""

from dataclasses import dataclass, field

from sqlalchemy import Table

from localesync.core.domain_types import (
    CARD_MUSICA, CATEGORIA_DE_MUSICA, entity_uid,
)
from localesync.models import (
    CardMusica,
    CategoriaDeMusica,
    card_musica_localizations,
    categoria_de_musica_localizations,
    categoria_card_links,
)

CARD_MUSICA_UID = entity_uid(CARD_MUSICA)
CATEGORIA_DE_MUSICA_UID = entity_uid(CATEGORIA_DE_MUSICA)


@dataclass(frozen=True)
class RelationSpec:
    table: Table
    owner_column: str
    target_column: str
    target_uid: str


@dataclass(frozen=True)
class ContentTypeSpec:
    uid: str
    table: Table
    relations: dict[str, RelationSpec] = field(default_factory=dict)


CONTENT_TYPES: dict[str, ContentTypeSpec] = {
    CARD_MUSICA_UID: ContentTypeSpec(
        uid=CARD_MUSICA_UID,
        table=CardMusica.__table__,
        relations={
            "localizations": RelationSpec(
                card_musica_localizations,
                "card_musica_id", "inv_card_musica_id", CARD_MUSICA_UID,
            ),
            "categoria_de_musicas": RelationSpec(
                categoria_card_links,
                "card_musica_id", "categoria_de_musica_id", CATEGORIA_DE_MUSICA_UID,
            ),
        },
    ),
    CATEGORIA_DE_MUSICA_UID: ContentTypeSpec(
        uid=CATEGORIA_DE_MUSICA_UID,
        table=CategoriaDeMusica.__table__,
        relations={
            "localizations": RelationSpec(
                categoria_de_musica_localizations,
                "categoria_de_musica_id", "inv_categoria_de_musica_id",
                CATEGORIA_DE_MUSICA_UID,
            ),
            "card_musicas": RelationSpec(
                categoria_card_links,
                "categoria_de_musica_id", "card_musica_id", CARD_MUSICA_UID,
            ),
        },
    ),
}

JOIN_TABLES: dict[str, Table] = {
    categoria_card_links.name: categoria_card_links,
}
