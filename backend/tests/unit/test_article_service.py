"""Unit tests for the ArticleService."""

import asyncio
from typing import Any

import pytest
from pydantic import ValidationError

from inkwell.application.interfaces import ArticleRepository, CommentRepository, LikeRepository
from inkwell.application.schemas import ArticleCreate, ArticleUpdate
from inkwell.application.services import ArticleService
from inkwell.domain.entities import (
    Actor,
    Article,
    ArticlePage,
    Comment,
    DELETED_CONTENT_PLACEHOLDER,
    DeletionMode,
    Like,
)
from inkwell.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    PersistenceError,
)

AUTHOR = Actor(id="author-1", email="author@example.com")
READER = Actor(id="reader-1", email="reader@example.com")


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository for unit testing.

    The ``fail_*`` / ``ignore_delete`` switches simulate a backend that
    rejects or silently drops writes.
    """

    def __init__(self):
        self._articles: dict[str, Article] = {}
        self._next_id = 1
        self.ignore_delete = False
        self.fail_delete = False
        self.patch_failures = 0
        self.patches: list[dict[str, Any]] = []
        self.fail_reads_after_delete = False
        self._reads_failing = False
        self.reads = 0

    async def get_by_id(self, article_id: str) -> Article | None:
        self.reads += 1
        if self._reads_failing:
            raise PersistenceError("select article", "connection reset")
        return self._articles.get(article_id)

    async def list_articles(
        self,
        *,
        published: bool | None = True,
        author_id: str | None = None,
        tag: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
        order_by: str = "created_at",
        ascending: bool = False,
    ) -> ArticlePage:
        rows = [a for a in self._articles.values() if not a.is_soft_deleted]
        if published is not None:
            rows = [a for a in rows if a.published == published]
        if author_id is not None:
            rows = [a for a in rows if a.author_id == author_id]
        if tag is not None:
            rows = [a for a in rows if tag in a.tags]
        if search:
            needle = search.lower()
            rows = [a for a in rows if needle in a.title.lower() or needle in a.content.lower()]
        rows.sort(key=lambda a: getattr(a, order_by), reverse=not ascending)
        return ArticlePage(items=rows[skip : skip + limit], total=len(rows), skip=skip, limit=limit)

    async def create(self, article: Article) -> Article:
        article.id = f"article-{self._next_id}"
        self._next_id += 1
        self._articles[article.id] = article
        return article

    async def update(self, article: Article) -> Article:
        if article.id not in self._articles:
            raise ValueError(f"Article {article.id} not found")
        self._articles[article.id] = article
        return article

    async def patch(self, article_id: str, fields: dict[str, Any]) -> Article | None:
        self.patches.append(fields)
        if self.patch_failures:
            self.patch_failures -= 1
            raise PersistenceError("patch article", "permission denied for table articles")
        article = self._articles.get(article_id)
        if article is None:
            return None
        for key, value in fields.items():
            setattr(article, key, value)
        return article

    async def delete(self, article_id: str) -> bool:
        self._reads_failing = self.fail_reads_after_delete
        if self.fail_delete:
            raise PersistenceError("delete article", "permission denied for table articles")
        if self.ignore_delete:
            return False
        return self._articles.pop(article_id, None) is not None


class FakeCommentRepository(CommentRepository):
    def __init__(self):
        self.comments: list[Comment] = []
        self.fail = False

    async def get_by_id(self, comment_id: str) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    async def list_for_article(self, article_id: str) -> list[Comment]:
        return [c for c in self.comments if c.article_id == article_id]

    async def create(self, comment: Comment) -> Comment:
        comment.id = f"comment-{len(self.comments) + 1}"
        self.comments.append(comment)
        return comment

    async def update(self, comment: Comment) -> Comment:
        return comment

    async def delete(self, comment_id: str) -> bool:
        before = len(self.comments)
        self.comments = [c for c in self.comments if c.id != comment_id]
        return len(self.comments) < before

    async def delete_for_article(self, article_id: str) -> int:
        if self.fail:
            raise PersistenceError("delete comments", "connection reset")
        before = len(self.comments)
        self.comments = [c for c in self.comments if c.article_id != article_id]
        return before - len(self.comments)


class FakeLikeRepository(LikeRepository):
    def __init__(self):
        self.likes: list[Like] = []

    async def get(self, article_id: str, user_id: str) -> Like | None:
        return next(
            (l for l in self.likes if l.article_id == article_id and l.user_id == user_id), None
        )

    async def create(self, like: Like) -> Like:
        self.likes.append(like)
        return like

    async def delete(self, article_id: str, user_id: str) -> bool:
        like = await self.get(article_id, user_id)
        if like is None:
            return False
        self.likes.remove(like)
        return True

    async def delete_for_article(self, article_id: str) -> int:
        before = len(self.likes)
        self.likes = [l for l in self.likes if l.article_id != article_id]
        return before - len(self.likes)


@pytest.fixture
def repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def comments() -> FakeCommentRepository:
    return FakeCommentRepository()


@pytest.fixture
def likes() -> FakeLikeRepository:
    return FakeLikeRepository()


@pytest.fixture
def service(repository, comments, likes) -> ArticleService:
    return ArticleService(repository, comments, likes)


async def _publish(service: ArticleService, title: str = "Hello", **kwargs) -> Article:
    data = ArticleCreate(title=title, content=kwargs.pop("content", "Body"), published=True, **kwargs)
    return await service.create_article(AUTHOR, data)


# ── Create / read ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_article(service: ArticleService):
    data = ArticleCreate(title="Test Article", content="Some content", tags=["react", " react ", ""])
    article = await service.create_article(AUTHOR, data)
    assert article.id is not None
    assert article.author_id == AUTHOR.id
    assert article.published is False
    assert article.tags == ["react"]


@pytest.mark.parametrize("title", ["   ", "[DELETED] mine", "  [DELETED]"])
def test_article_title_rejects_blank_and_deletion_marker(title: str):
    with pytest.raises(ValidationError):
        ArticleCreate(title=title, content="x")
    with pytest.raises(ValidationError):
        ArticleUpdate(title=title)


def test_article_title_is_stripped():
    assert ArticleCreate(title="  Hello  ").title == "Hello"
    assert ArticleUpdate(title=" Renamed ").title == "Renamed"
    assert ArticleUpdate().title is None


@pytest.mark.asyncio
async def test_get_article_not_found(service: ArticleService):
    with pytest.raises(EntityNotFoundError):
        await service.get_article("missing")


@pytest.mark.asyncio
async def test_draft_visible_to_author_only(service: ArticleService):
    draft = await service.create_article(AUTHOR, ArticleCreate(title="Draft", content="wip"))

    assert (await service.get_article(draft.id, AUTHOR)).title == "Draft"
    with pytest.raises(EntityNotFoundError):
        await service.get_article(draft.id, READER)
    with pytest.raises(EntityNotFoundError):
        await service.get_article(draft.id)


@pytest.mark.asyncio
async def test_published_feed_excludes_drafts_and_soft_deleted(service, repository):
    visible = await _publish(service, "Visible")
    await service.create_article(AUTHOR, ArticleCreate(title="Draft", content="x"))
    hidden = await _publish(service, "Hidden")
    await repository.patch(hidden.id, {"title": "[DELETED] abcd1234"})

    page = await service.list_published()

    assert [a.id for a in page.items] == [visible.id]
    assert page.total == 1


@pytest.mark.asyncio
async def test_list_published_rejects_unknown_order(service: ArticleService):
    with pytest.raises(ValueError):
        await service.list_published(order_by="content")


@pytest.mark.asyncio
async def test_search_is_case_insensitive(service: ArticleService):
    await _publish(service, "Learning React", content="hooks")
    await _publish(service, "Gardening", content="tomatoes")

    page = await service.search("react")

    assert [a.title for a in page.items] == ["Learning React"]


@pytest.mark.asyncio
async def test_list_by_tag(service: ArticleService):
    await _publish(service, "Tagged", tags=["python"])
    await _publish(service, "Untagged")

    page = await service.list_by_tag("python")

    assert [a.title for a in page.items] == ["Tagged"]


@pytest.mark.asyncio
async def test_list_by_author_includes_drafts_only_for_the_author(service: ArticleService):
    await _publish(service, "Public")
    await service.create_article(AUTHOR, ArticleCreate(title="Draft", content="x"))

    own = await service.list_by_author(AUTHOR.id, AUTHOR, include_unpublished=True)
    other = await service.list_by_author(AUTHOR.id, READER, include_unpublished=True)

    assert own.total == 2
    assert other.total == 1


# ── Update ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_article(service: ArticleService):
    created = await _publish(service, "Old", content="Old content")
    updated = await service.update_article(AUTHOR, created.id, ArticleUpdate(title="New"))
    assert updated.title == "New"
    assert updated.content == "Old content"


@pytest.mark.asyncio
async def test_update_moves_updated_at_forward(service: ArticleService):
    created = await _publish(service)
    previous = created.updated_at

    first = await service.update_article(AUTHOR, created.id, ArticleUpdate(content="one"))
    first_stamp = first.updated_at
    second = await service.update_article(AUTHOR, created.id, ArticleUpdate(content="two"))

    assert first_stamp > previous
    assert second.updated_at > first_stamp


@pytest.mark.asyncio
async def test_update_by_non_author_is_denied(service: ArticleService):
    created = await _publish(service)
    with pytest.raises(PermissionDeniedError):
        await service.update_article(READER, created.id, ArticleUpdate(title="Hijacked"))


@pytest.mark.asyncio
async def test_unpublish_hides_article_from_feed(service: ArticleService):
    created = await _publish(service)
    await service.set_published(AUTHOR, created.id, False)
    assert (await service.list_published()).total == 0


# ── Delete chain ─────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_removes_article_comments_and_likes(service, repository, comments, likes):
    article = await _publish(service)
    await comments.create(Comment(article_id=article.id, user_id=READER.id, content="Nice"))
    await likes.create(Like(article_id=article.id, user_id=READER.id))

    result = await service.delete_article(AUTHOR, article.id)

    assert result.success is True
    assert result.mode == DeletionMode.HARD
    assert result.warning is None
    assert await repository.get_by_id(article.id) is None
    assert comments.comments == []
    assert likes.likes == []


@pytest.mark.asyncio
async def test_delete_twice_after_hard_delete_reports_not_found(service: ArticleService):
    # The row is gone, so the precheck cannot tell it from an id that never existed
    article = await _publish(service)
    await service.delete_article(AUTHOR, article.id)
    with pytest.raises(EntityNotFoundError):
        await service.delete_article(AUTHOR, article.id)


@pytest.mark.asyncio
async def test_delete_of_soft_deleted_article_is_a_no_op(service, repository):
    article = await _publish(service)
    repository.ignore_delete = True
    await service.delete_article(AUTHOR, article.id)
    repository.patches.clear()

    result = await service.delete_article(AUTHOR, article.id)

    assert result.mode == DeletionMode.ALREADY_DELETED
    assert repository.patches == []


@pytest.mark.asyncio
async def test_delete_twice_on_fallback_path_succeeds_both_times(service, repository):
    article = await _publish(service)
    repository.fail_delete = True

    first = await service.delete_article(AUTHOR, article.id)
    second = await service.delete_article(AUTHOR, article.id)

    assert (first.success, first.mode) == (True, DeletionMode.SOFT)
    assert (second.success, second.mode) == (True, DeletionMode.ALREADY_DELETED)
    assert second.warning is None


@pytest.mark.asyncio
async def test_unreadable_article_after_delete_falls_back_to_soft_delete(service, repository):
    article = await _publish(service)
    repository.ignore_delete = True
    repository.fail_reads_after_delete = True

    result = await service.delete_article(AUTHOR, article.id)

    assert result.mode == DeletionMode.SOFT
    assert repository.patches[0]["title"].startswith("[DELETED] ")


@pytest.mark.asyncio
async def test_verify_re_reads_up_to_the_configured_attempts(repository, comments, likes):
    service = ArticleService(repository, comments, likes, verify_attempts=3)
    article = await _publish(service)
    repository.ignore_delete = True
    repository.reads = 0

    result = await service.delete_article(AUTHOR, article.id)

    assert result.mode == DeletionMode.SOFT
    # one precheck read plus three verification reads
    assert repository.reads == 4


@pytest.mark.asyncio
async def test_delete_by_non_author_is_denied(service, repository):
    article = await _publish(service)
    with pytest.raises(PermissionDeniedError):
        await service.delete_article(READER, article.id)
    assert await repository.get_by_id(article.id) is not None


@pytest.mark.asyncio
async def test_delete_missing_article(service: ArticleService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_article(AUTHOR, "missing")


@pytest.mark.asyncio
async def test_rejected_hard_delete_falls_back_to_soft_delete(service, repository):
    article = await _publish(service, "Secret plans", content="Top secret")
    repository.fail_delete = True

    result = await service.delete_article(AUTHOR, article.id)

    assert result.success is True
    assert result.mode == DeletionMode.SOFT
    assert result.warning
    stored = await repository.get_by_id(article.id)
    assert stored.title.startswith("[DELETED] ")
    assert stored.content == DELETED_CONTENT_PLACEHOLDER
    assert stored.published is False
    assert (await service.list_published()).total == 0
    with pytest.raises(EntityNotFoundError):
        await service.get_article(article.id, AUTHOR)


@pytest.mark.asyncio
async def test_silently_ignored_hard_delete_falls_back_to_soft_delete(service, repository):
    article = await _publish(service)
    repository.ignore_delete = True

    result = await service.delete_article(AUTHOR, article.id)

    assert result.mode == DeletionMode.SOFT
    assert (await repository.get_by_id(article.id)).is_soft_deleted


@pytest.mark.asyncio
async def test_failed_soft_delete_falls_back_to_title_mark(service, repository):
    article = await _publish(service, content="Keep me")
    repository.fail_delete = True
    repository.patch_failures = 1

    result = await service.delete_article(AUTHOR, article.id)

    assert result.success is True
    assert result.mode == DeletionMode.MINIMAL
    assert result.warning
    stored = await repository.get_by_id(article.id)
    assert stored.title.startswith("[DELETED] ")
    assert stored.content == "Keep me"
    assert repository.patches[-1].keys() == {"title"}


@pytest.mark.asyncio
async def test_failed_title_mark_still_reports_success_with_warning(service, repository):
    article = await _publish(service)
    repository.fail_delete = True
    repository.patch_failures = 2

    result = await service.delete_article(AUTHOR, article.id)

    assert result.success is True
    assert result.mode == DeletionMode.MINIMAL
    assert "could not" in result.warning


@pytest.mark.asyncio
async def test_comment_cleanup_failure_does_not_stop_delete(service, repository, comments):
    article = await _publish(service)
    comments.fail = True

    result = await service.delete_article(AUTHOR, article.id)

    assert result.mode == DeletionMode.HARD
    assert await repository.get_by_id(article.id) is None


@pytest.mark.asyncio
async def test_soft_deleted_marker_titles_are_distinct(repository, comments, likes):
    service = ArticleService(repository, comments, likes)
    repository.ignore_delete = True
    first = await _publish(service, "One")
    second = await _publish(service, "Two")

    await asyncio.gather(
        service.delete_article(AUTHOR, first.id),
        service.delete_article(AUTHOR, second.id),
    )

    titles = {(await repository.get_by_id(a.id)).title for a in (first, second)}
    assert len(titles) == 2
