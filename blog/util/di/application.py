"""Application layer DI providers."""

from dishka import Scope, provide

from blog.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetThreadUseCase,
    GetUserCommentsUseCase,
    ToggleLikeUseCase,
    UpdateCommentUseCase,
)
from blog.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListCategoriesUseCase,
    ListPostsUseCase,
    ListTagsUseCase,
    TogglePostLikeUseCase,
    UpdatePostUseCase,
)
from blog.config import PaginationSettings
from blog.domain.service import CommentService, PostService, UserService
from blog.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, comment_service: CommentService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        comment_service: CommentService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            comment_service=comment_service,
            user_service=user_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_user_comments_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> GetUserCommentsUseCase:
        """Provide get user comments use case."""
        return GetUserCommentsUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            pagination_settings=pagination_settings,
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            user_service=user_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_post_like_use_case(
        self, post_service: PostService
    ) -> TogglePostLikeUseCase:
        """Provide toggle post like use case."""
        return TogglePostLikeUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, post_service: PostService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, post_service: PostService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(post_service=post_service)
