"""Initial schema — locales, localized cards and categories, link tables.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Link tables reference their entries with ON DELETE CASCADE so deleting a
card or category also drops its localization and category link rows.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (link table, owner column, inverse column, referenced table)
_LOCALIZATION_LINKS = [
    ("card_musicas_localizations_links", "card_musica_id",
     "inv_card_musica_id", "card_musicas"),
    ("categoria_de_musicas_localizations_links", "categoria_de_musica_id",
     "inv_categoria_de_musica_id", "categoria_de_musicas"),
]


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True),
        nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "i18n_locale",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(16), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_table(
        "card_musicas",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("letra", sa.Text(), nullable=True),
        sa.Column("autor", sa.String(255), nullable=True),
        sa.Column("locale", sa.String(16), nullable=False),
        _created_at(),
    )
    op.create_table(
        "categoria_de_musicas",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("locale", sa.String(16), nullable=False),
        _created_at(),
    )
    for table, owner, inverse, ref in _LOCALIZATION_LINKS:
        op.create_table(
            table,
            sa.Column(
                owner, sa.Integer(),
                sa.ForeignKey(f"{ref}.id", ondelete="CASCADE"), primary_key=True,
            ),
            sa.Column(
                inverse, sa.Integer(),
                sa.ForeignKey(f"{ref}.id", ondelete="CASCADE"), primary_key=True,
            ),
        )
    op.create_table(
        "categoria_de_musicas_card_musica_links",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "categoria_de_musica_id", sa.Integer(),
            sa.ForeignKey("categoria_de_musicas.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "card_musica_id", sa.Integer(),
            sa.ForeignKey("card_musicas.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_card_musicas_locale", "card_musicas", ["locale"],
    )
    op.create_index(
        "ix_categoria_de_musicas_locale", "categoria_de_musicas", ["locale"],
    )


def downgrade() -> None:
    op.drop_index("ix_categoria_de_musicas_locale", "categoria_de_musicas")
    op.drop_index("ix_card_musicas_locale", "card_musicas")
    op.drop_table("categoria_de_musicas_card_musica_links")
    for table, _, _, _ in reversed(_LOCALIZATION_LINKS):
        op.drop_table(table)
    op.drop_table("categoria_de_musicas")
    op.drop_table("card_musicas")
    op.drop_table("i18n_locale")
