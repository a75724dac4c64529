"""Card Routes — create/get/delete song cards; creation fans out to every locale.

Invariants:
    - POST returns the created entry with localizations and categories populated
    - DELETE also removes the card's sibling localizations
"""

from fastapi import APIRouter, Depends, status

from localesync.api.dependencies import get_content_service
from localesync.infrastructure.content_types import CARD_MUSICA_UID
from localesync.schemas.content import CardMusicaCreate, DeleteResponse
from localesync.services.content_service import ContentService

router = APIRouter(prefix="/api/v1/card-musicas", tags=["card-musicas"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_card(
    body: CardMusicaCreate, content: ContentService = Depends(get_content_service),
):
    return await content.create(CARD_MUSICA_UID, body.model_dump(exclude_none=True))


@router.get("/{entry_id}")
async def get_card(
    entry_id: int, content: ContentService = Depends(get_content_service),
):
    return await content.get(CARD_MUSICA_UID, entry_id)


@router.delete("/{entry_id}", response_model=DeleteResponse)
async def delete_card(
    entry_id: int, content: ContentService = Depends(get_content_service),
):
    outcome = await content.delete(CARD_MUSICA_UID, entry_id)
    return DeleteResponse(
        id=outcome.entry["id"],
        locale=outcome.entry.get("locale"),
        localizations_deleted=outcome.cascade.sibling_ids if outcome.cascade else [],
    )
