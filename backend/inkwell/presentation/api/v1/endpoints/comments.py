"""Comment endpoints, including a live server-sent event stream per article."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from inkwell.application.schemas import CommentCreate, CommentResponse, CommentUpdate
from inkwell.application.services import ChangeFeed, CommentService
from inkwell.application.services.comment_service import COMMENTS_TABLE
from inkwell.domain.entities import Actor
from inkwell.infrastructure.dependencies import (
    get_change_feed,
    get_comment_service,
    get_current_actor,
)
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(tags=["Comments"])


@router.get("/articles/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: str,
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    """Comments on an article, newest first."""
    try:
        comments = await service.list_comments(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.post(
    "/articles/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    article_id: str,
    data: CommentCreate,
    actor: Actor = Depends(get_current_actor),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    try:
        comment = await service.add_comment(actor, article_id, data.content)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return CommentResponse.model_validate(comment, from_attributes=True)


@router.get("/articles/{article_id}/comments/stream")
async def comment_stream(
    article_id: str,
    feed: ChangeFeed = Depends(get_change_feed),
) -> StreamingResponse:
    """SSE endpoint for live comment changes on one article.

    Clients connect via EventSource and receive INSERT / UPDATE / DELETE
    events as comments change.
    """
    subscription = feed.subscribe(COMMENTS_TABLE, match={"article_id": article_id})
    return StreamingResponse(
        feed.stream(subscription),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    actor: Actor = Depends(get_current_actor),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """Edit a comment's content (author only)."""
    try:
        comment = await service.update_comment(actor, comment_id, data.content)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return CommentResponse.model_validate(comment, from_attributes=True)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    actor: Actor = Depends(get_current_actor),
    service: CommentService = Depends(get_comment_service),
) -> None:
    """Delete a comment (author only)."""
    try:
        await service.delete_comment(actor, comment_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
