"""Article lifecycle endpoints — feed, search, authoring, publish state and deletion."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from inkwell.application.schemas import (
    ArticleCreate,
    ArticlePageResponse,
    ArticleResponse,
    ArticleUpdate,
    DeletionResponse,
)
from inkwell.application.services import ArticleService
from inkwell.domain.entities import Actor, ArticlePage
from inkwell.infrastructure.dependencies import (
    get_article_service,
    get_current_actor,
    get_optional_actor,
)
from inkwell.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/articles", tags=["Articles"])


def _to_page(page: ArticlePage) -> ArticlePageResponse:
    return ArticlePageResponse(
        items=[ArticleResponse.model_validate(a, from_attributes=True) for a in page.items],
        total=page.total,
        skip=page.skip,
        limit=page.limit,
    )


# ── Listings ─────────────────────────────────────────────────────────

@router.get("", response_model=ArticlePageResponse)
async def list_published_articles(
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    order_by: Literal["created_at", "updated_at", "title"] = "created_at",
    ascending: bool = False,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Retrieve a page of the published feed."""
    page = await service.list_published(skip=skip, limit=limit, order_by=order_by, ascending=ascending)
    return _to_page(page)


@router.get("/search", response_model=ArticlePageResponse)
async def search_articles(
    q: str = Query(..., min_length=1, description="Substring matched against title and content"),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Case-insensitive search over published articles."""
    return _to_page(await service.search(q, skip=skip, limit=limit))


@router.get("/tags/{tag}", response_model=ArticlePageResponse)
async def list_articles_by_tag(
    tag: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Published articles carrying a tag."""
    return _to_page(await service.list_by_tag(tag, skip=skip, limit=limit))


@router.get("/authors/{author_id}", response_model=ArticlePageResponse)
async def list_articles_by_author(
    author_id: str,
    include_unpublished: bool = False,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor | None = Depends(get_optional_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """An author's articles. Drafts are included only when the author asks for them."""
    page = await service.list_by_author(
        author_id, actor, include_unpublished=include_unpublished, skip=skip, limit=limit
    )
    return _to_page(page)


# ── Single article ───────────────────────────────────────────────────

@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    actor: Actor | None = Depends(get_optional_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    try:
        article = await service.get_article(article_id, actor)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article (a draft unless ``published`` is true)."""
    try:
        article = await service.create_article(actor, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article. Only the fields sent are changed."""
    try:
        article = await service.update_article(actor, article_id, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("/{article_id}/publish", response_model=ArticleResponse)
async def publish_article(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.set_published(actor, article_id, True)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}/publish", response_model=ArticleResponse)
async def unpublish_article(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Move an article back to drafts."""
    try:
        article = await service.set_published(actor, article_id, False)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", response_model=DeletionResponse)
async def delete_article(
    article_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> DeletionResponse:
    """Delete an article.

    Always answers with the terminal outcome; ``warning`` is set when the
    article could only be hidden rather than removed.
    """
    try:
        result = await service.delete_article(actor, article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return DeletionResponse(
        article_id=result.article_id,
        success=result.success,
        mode=result.mode.value,
        warning=result.warning,
    )
