"""Unit tests for editing, deleting, liking and browsing posts."""

from uuid import uuid4

import pytest

from blog.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from blog.application.usecase.post import (
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListCategoriesUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    ListTagsUseCase,
    ListTaxonomyRequest,
    TogglePostLikeRequest,
    TogglePostLikeUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from blog.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from blog.domain.repository import CommentRepository, PostRepository, UserRepository
from blog.domain.value import PostSort, PostStatus
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdatePostUseCase:
    """Tests for UpdatePostUseCase."""

    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(UpdatePostUseCase)
        author = await seed_user(user_repo, "writer")
        post = await seed_post(post_repo, author.id, category="Code", tags=["python"])

        # Act
        response = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id),
                user_id=str(author.id),
                title="Retitled",
                cover_image="https://example.com/cover.png",
            )
        )

        # Assert
        assert response.title == "Retitled"
        assert response.slug == str(post.slug)
        assert response.category == "Code"
        assert response.tags == ["python"]
        assert response.cover_image == "https://example.com/cover.png"
        assert response.author.username == "writer"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(UpdatePostUseCase)
        author = await seed_user(user_repo, "writer")
        stranger = await seed_user(user_repo, "stranger")
        post = await seed_post(post_repo, author.id)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdatePostRequest(
                    post_id=str(post.id), user_id=str(stranger.id), title="Mine"
                )
            )


class TestDeletePostUseCase:
    """Tests for DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_delete_post_removes_its_comments(self, unit_env):
        """Comments of the deleted post go too; other posts keep theirs."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        comment_repo = await unit_env.get(CommentRepository)
        create_comment = await unit_env.get(CreateCommentUseCase)
        use_case = await unit_env.get(DeletePostUseCase)
        author = await seed_user(user_repo, "writer")
        post = await seed_post(post_repo, author.id)
        other = await seed_post(post_repo, author.id, title="Other")
        top = await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id), content="Top", author_id=str(author.id)
            )
        )
        await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                content="Reply",
                author_id=str(author.id),
                parent_id=top.comment_id,
            )
        )
        await create_comment.execute(
            CreateCommentRequest(
                post_id=str(other.id), content="Elsewhere", author_id=str(author.id)
            )
        )

        # Act
        response = await use_case.execute(
            DeletePostRequest(post_id=str(post.id), user_id=str(author.id))
        )

        # Assert
        assert response.deleted_comments == 2
        assert await post_repo.find_by_id(post.id) is None
        assert await comment_repo.count_by_post(post.id) == 0
        assert await comment_repo.count_by_post(other.id) == 1

    @pytest.mark.asyncio
    async def test_unauthorized_delete_keeps_comments(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        comment_repo = await unit_env.get(CommentRepository)
        create_comment = await unit_env.get(CreateCommentUseCase)
        use_case = await unit_env.get(DeletePostUseCase)
        author = await seed_user(user_repo, "writer")
        stranger = await seed_user(user_repo, "stranger")
        post = await seed_post(post_repo, author.id)
        await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id), content="Top", author_id=str(author.id)
            )
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeletePostRequest(post_id=str(post.id), user_id=str(stranger.id))
            )
        assert await post_repo.find_by_id(post.id) is not None
        assert await comment_repo.count_by_post(post.id) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_post_raises_not_found(self, unit_env):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(DeletePostUseCase)
        author = await seed_user(user_repo, "writer")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeletePostRequest(post_id=str(uuid4()), user_id=str(author.id))
            )


class TestViewsAndLikes:
    """Tests for view counting and TogglePostLikeUseCase."""

    @pytest.mark.asyncio
    async def test_each_read_counts_as_view(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(GetPostUseCase)
        author = await seed_user(user_repo, "writer")
        post = await seed_post(post_repo, author.id)

        # Act
        await use_case.execute(GetPostRequest(post_id=str(post.id)))
        second = await use_case.execute(GetPostRequest(post_id=str(post.id)))

        # Assert
        assert second.views == 2

    @pytest.mark.asyncio
    async def test_toggle_post_like(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(TogglePostLikeUseCase)
        author = await seed_user(user_repo, "writer")
        reader = await seed_user(user_repo, "reader")
        post = await seed_post(post_repo, author.id)
        request = TogglePostLikeRequest(post_id=str(post.id), user_id=str(reader.id))

        # Act
        liked = await use_case.execute(request)
        unliked = await use_case.execute(request)

        # Assert
        assert liked.liked is True
        assert liked.like_count == 1
        assert liked.likes[0].user_id == str(reader.id)
        assert unliked.liked is False
        assert unliked.like_count == 0


class TestBrowsePosts:
    """Tests for filtered listings, categories and tags."""

    @pytest.mark.asyncio
    async def test_list_by_author_and_sort(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(ListPostsUseCase)
        alice = await seed_user(user_repo, "alice")
        bob = await seed_user(user_repo, "bob")
        first = await seed_post(post_repo, alice.id, title="First")
        second = await seed_post(post_repo, alice.id, title="Second")
        await seed_post(post_repo, bob.id, title="Bob's")
        await seed_post(post_repo, alice.id, title="Draft", status=PostStatus.DRAFT)

        # Act
        response = await use_case.execute(
            ListPostsRequest(author_id=str(alice.id), sort=PostSort.OLDEST)
        )

        # Assert
        assert [p.post_id for p in response.posts] == [str(first.id), str(second.id)]
        assert response.pagination.total == 2

    @pytest.mark.asyncio
    async def test_malformed_author_id_raises_validation(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(ListPostsRequest(author_id="not-a-uuid"))

    @pytest.mark.asyncio
    async def test_categories_and_tags(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        categories_use_case = await unit_env.get(ListCategoriesUseCase)
        tags_use_case = await unit_env.get(ListTagsUseCase)
        author = await seed_user(user_repo, "writer")
        await seed_post(post_repo, author.id, category="Code", tags=["python"])
        await seed_post(post_repo, author.id, category="Code", tags=["sql", "python"])

        # Act
        categories = await categories_use_case.execute(ListTaxonomyRequest())
        tags = await tags_use_case.execute(ListTaxonomyRequest())

        # Assert
        assert categories.categories == ["Code"]
        assert tags.tags == ["python", "sql"]
