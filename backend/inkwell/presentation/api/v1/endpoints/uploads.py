"""Image upload endpoints."""

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from inkwell.application.schemas import StoredObjectResponse
from inkwell.application.services import ImageService
from inkwell.domain.entities import Actor
from inkwell.infrastructure.dependencies import get_current_actor, get_image_service
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/uploads/images", tags=["Uploads"])


@router.post("", response_model=StoredObjectResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile,
    actor: Actor = Depends(get_current_actor),
    service: ImageService = Depends(get_image_service),
) -> StoredObjectResponse:
    """Upload an image for use as an article's featured image."""
    content = await file.read()
    try:
        stored = await service.upload_image(
            actor, content, file.filename or "image", file.content_type
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return StoredObjectResponse.model_validate(stored, from_attributes=True)


@router.get("", response_model=list[StoredObjectResponse])
async def list_images(
    actor: Actor = Depends(get_current_actor),
    service: ImageService = Depends(get_image_service),
) -> list[StoredObjectResponse]:
    images = await service.list_images(actor)
    return [StoredObjectResponse.model_validate(i, from_attributes=True) for i in images]


@router.delete("/{path:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    path: str,
    actor: Actor = Depends(get_current_actor),
    service: ImageService = Depends(get_image_service),
) -> None:
    try:
        deleted = await service.delete_image(actor, path)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Image '{path}' not found")
