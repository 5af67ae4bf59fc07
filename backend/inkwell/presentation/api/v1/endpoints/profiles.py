"""Profile endpoints."""

from fastapi import APIRouter, Depends

from inkwell.application.schemas import ProfileResponse, ProfileUpdate
from inkwell.application.services import ProfileService
from inkwell.domain.entities import Actor
from inkwell.infrastructure.dependencies import get_current_actor, get_profile_service
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    actor: Actor = Depends(get_current_actor),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """The actor's profile, created on first request if missing."""
    try:
        profile = await service.get_or_create_profile(actor)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    data: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        profile = await service.update_profile(actor, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        profile = await service.get_profile(user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ProfileResponse.model_validate(profile, from_attributes=True)
