"""ORM Models — SQLAlchemy declarative models for locales and localized content.

Invariants:
    - All models inherit from Base (db/base.py)
    - Localization groups live in symmetric self-referencing link tables

Design Decisions:
    - One file per entity; link tables grouped in links.py
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from localesync.models.locale import Locale  # noqa: F401
from localesync.models.card_musica import CardMusica  # noqa: F401
from localesync.models.categoria_de_musica import CategoriaDeMusica  # noqa: F401
from localesync.models.links import (  # noqa: F401
    card_musica_localizations,
    categoria_de_musica_localizations,
    categoria_card_links,
)
