"""Category Routes — create/get/delete song categories, localized like cards."""

from fastapi import APIRouter, Depends, status

from localesync.api.dependencies import get_content_service
from localesync.infrastructure.content_types import CATEGORIA_DE_MUSICA_UID
from localesync.schemas.content import CategoriaDeMusicaCreate, DeleteResponse
from localesync.services.content_service import ContentService

router = APIRouter(
    prefix="/api/v1/categoria-de-musicas", tags=["categoria-de-musicas"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoriaDeMusicaCreate,
    content: ContentService = Depends(get_content_service),
):
    return await content.create(
        CATEGORIA_DE_MUSICA_UID, body.model_dump(exclude_none=True),
    )


@router.get("/{entry_id}")
async def get_category(
    entry_id: int, content: ContentService = Depends(get_content_service),
):
    return await content.get(CATEGORIA_DE_MUSICA_UID, entry_id)


@router.delete("/{entry_id}", response_model=DeleteResponse)
async def delete_category(
    entry_id: int, content: ContentService = Depends(get_content_service),
):
    outcome = await content.delete(CATEGORIA_DE_MUSICA_UID, entry_id)
    return DeleteResponse(
        id=outcome.entry["id"],
        locale=outcome.entry.get("locale"),
        localizations_deleted=outcome.cascade.sibling_ids if outcome.cascade else [],
    )
