"""Like and bookmark endpoints."""

from fastapi import APIRouter, Depends

from inkwell.application.schemas import (
    BookmarkResponse,
    BookmarkToggleResponse,
    LikeStatusResponse,
)
from inkwell.application.services import BookmarkService, BookmarkShelf, LikeService
from inkwell.domain.entities import Actor
from inkwell.infrastructure.dependencies import (
    get_bookmark_service,
    get_current_actor,
    get_like_service,
)
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(tags=["Engagement"])


# ── Likes ────────────────────────────────────────────────────────────

@router.get("/articles/{article_id}/like", response_model=LikeStatusResponse)
async def get_like_status(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: LikeService = Depends(get_like_service),
) -> LikeStatusResponse:
    try:
        liked = await service.has_liked(actor, article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return LikeStatusResponse(article_id=article_id, liked=liked)


@router.put("/articles/{article_id}/like", response_model=LikeStatusResponse)
async def like_article(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: LikeService = Depends(get_like_service),
) -> LikeStatusResponse:
    """Like an article. Repeating the call is harmless."""
    try:
        await service.like(actor, article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return LikeStatusResponse(article_id=article_id, liked=True)


@router.delete("/articles/{article_id}/like", response_model=LikeStatusResponse)
async def unlike_article(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: LikeService = Depends(get_like_service),
) -> LikeStatusResponse:
    try:
        await service.unlike(actor, article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return LikeStatusResponse(article_id=article_id, liked=False)


# ── Bookmarks ────────────────────────────────────────────────────────

@router.get("/bookmarks", response_model=list[BookmarkResponse])
async def list_bookmarks(
    actor: Actor = Depends(get_current_actor),
    service: BookmarkService = Depends(get_bookmark_service),
) -> list[BookmarkResponse]:
    """The actor's bookmarks with article snapshots."""
    bookmarks = await service.list_bookmarks(actor)
    return [BookmarkResponse.model_validate(b, from_attributes=True) for b in bookmarks]


@router.post("/bookmarks/{article_id}/toggle", response_model=BookmarkToggleResponse)
async def toggle_bookmark(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkToggleResponse:
    """Add or remove a bookmark and return the updated shelf."""
    shelf = BookmarkShelf(service, actor)
    try:
        await shelf.load()
        bookmarked = await shelf.toggle(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BookmarkToggleResponse(
        article_id=article_id,
        bookmarked=bookmarked,
        bookmarks=[BookmarkResponse.model_validate(b, from_attributes=True) for b in shelf.items],
    )
