"""Content Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Locale codes: 2-16 chars of letters, digits and '-'
    - Text fields stripped; titles/names non-empty after strip
    - Relation payloads follow the host shape {"connect": [{"id": ...}]}
"""

from pydantic import BaseModel, Field, field_validator

_LOCALE_PATTERN = r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$"


class RelationRef(BaseModel):
    id: int = Field(gt=0)


class RelationConnect(BaseModel):
    """Relation connect operation. The first ref drives category linking."""
    connect: list[RelationRef] = Field(default_factory=list)


class LocaleCreate(BaseModel):
    code: str = Field(min_length=2, max_length=16, pattern=_LOCALE_PATTERN)
    name: str | None = Field(None, max_length=100)
    is_default: bool = False


class LocaleResponse(BaseModel):
    id: int
    code: str
    name: str | None = None
    is_default: bool = False


class _LocalizedCreate(BaseModel):
    locale: str | None = Field(None, min_length=2, max_length=16, pattern=_LOCALE_PATTERN)
    localizations: list[int] = Field(default_factory=list)


class CardMusicaCreate(_LocalizedCreate):
    """Card creation. categoria_de_musicas is linked per locale after create."""
    titulo: str = Field(min_length=1, max_length=255)
    letra: str | None = None
    autor: str | None = Field(None, max_length=255)
    categoria_de_musicas: RelationConnect = Field(default_factory=RelationConnect)

    @field_validator("titulo")
    @classmethod
    def strip_titulo(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("titulo cannot be empty or whitespace")
        return v


class CategoriaDeMusicaCreate(_LocalizedCreate):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nome cannot be empty or whitespace")
        return v


class DeleteResponse(BaseModel):
    id: int
    locale: str | None = None
    localizations_deleted: list[int] = Field(default_factory=list)
