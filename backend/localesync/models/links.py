"""Link Tables — localization groups and the category/card many-to-many.

Invariants:
    - Every FK is ON DELETE CASCADE: deleting an entry drops its link rows
    - Localization link tables are symmetric: (a, b) present iff (b, a) present
      (maintained by the query engine on create)

Design Decisions:
    - Core Table objects rather than association models: rows carry no behavior
    - categoria_card_links keeps a surrogate id so link rows can be created one at a time
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from localesync.db.base import Base


card_musica_localizations = Table(
    "card_musicas_localizations_links",
    Base.metadata,
    Column(
        "card_musica_id", Integer,
        ForeignKey("card_musicas.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "inv_card_musica_id", Integer,
        ForeignKey("card_musicas.id", ondelete="CASCADE"), primary_key=True,
    ),
)

categoria_de_musica_localizations = Table(
    "categoria_de_musicas_localizations_links",
    Base.metadata,
    Column(
        "categoria_de_musica_id", Integer,
        ForeignKey("categoria_de_musicas.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "inv_categoria_de_musica_id", Integer,
        ForeignKey("categoria_de_musicas.id", ondelete="CASCADE"), primary_key=True,
    ),
)

categoria_card_links = Table(
    "categoria_de_musicas_card_musica_links",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "categoria_de_musica_id", Integer,
        ForeignKey("categoria_de_musicas.id", ondelete="CASCADE"), nullable=False,
    ),
    Column(
        "card_musica_id", Integer,
        ForeignKey("card_musicas.id", ondelete="CASCADE"), nullable=False,
    ),
)
