"""Domain layer DI providers."""

from dishka import Scope, provide

from blog.config import AuthSettings, StoreSettings
from blog.domain.repository import CommentRepository, PostRepository, UserRepository
from blog.domain.service import (
    AuthorizationService,
    CommentService,
    JWTService,
    PostService,
    UserService,
)
from blog.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_authorization_service(
        self, user_repository: UserRepository
    ) -> AuthorizationService:
        """Provide author-or-admin authorization service."""
        return AuthorizationService(user_repository=user_repository)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        authorization_service: AuthorizationService,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            authorization_service=authorization_service,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        authorization_service: AuthorizationService,
        store_settings: StoreSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            authorization_service=authorization_service,
            store_settings=store_settings,
        )
