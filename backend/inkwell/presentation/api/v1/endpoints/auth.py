"""Authentication endpoints — sign-up, sign-in, sign-out and password change."""

from fastapi import APIRouter, Depends, status

from inkwell.application.schemas import (
    ActorResponse,
    PasswordChangeRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
)
from inkwell.application.services import AuthService
from inkwell.domain.entities import Actor, AuthSession
from inkwell.infrastructure.dependencies import (
    get_access_token,
    get_auth_service,
    get_current_actor,
)
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/auth", tags=["Auth"])


def _to_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        expires_in=session.expires_in,
        user=ActorResponse.model_validate(session.actor, from_attributes=True),
    )


@router.post("/sign-up", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    data: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Register an identity, create its profile and open a session."""
    try:
        session = await service.sign_up(data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return _to_response(session)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    data: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    try:
        session = await service.sign_in(data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return _to_response(session)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    token: str | None = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Revoke the current session token. Signing out twice is harmless."""
    if token:
        await service.sign_out(token)


@router.get("/me", response_model=ActorResponse)
async def me(actor: Actor = Depends(get_current_actor)) -> ActorResponse:
    return ActorResponse.model_validate(actor, from_attributes=True)


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    data: PasswordChangeRequest,
    actor: Actor = Depends(get_current_actor),
    service: AuthService = Depends(get_auth_service),
) -> None:
    try:
        await service.change_password(actor, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
