"""Domain layer DI providers."""

from dishka import Scope, provide

from opaq.config import AuthSettings, DiscussionSettings
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    DiscussionRepository,
    PitchInteractionRepository,
    PitchRepository,
    PostInteractionRepository,
    PostRepository,
    UserRepository,
)
from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    InteractionService,
    JWTService,
    PitchService,
    PostService,
    UserService,
)
from opaq.util.di.base import ProviderBase


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
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_interaction_service(
        self,
        post_interaction_repository: PostInteractionRepository,
        discussion_repository: DiscussionRepository,
        post_service: PostService,
    ) -> InteractionService:
        """Provide post interaction domain service."""
        return InteractionService(
            post_interaction_repository=post_interaction_repository,
            discussion_repository=discussion_repository,
            post_service=post_service,
        )

    @provide
    def get_discussion_service(
        self,
        discussion_repository: DiscussionRepository,
        discussion_interaction_repository: DiscussionInteractionRepository,
        post_service: PostService,
        discussion_settings: DiscussionSettings,
    ) -> DiscussionService:
        """Provide discussion domain service."""
        return DiscussionService(
            discussion_repository=discussion_repository,
            discussion_interaction_repository=discussion_interaction_repository,
            post_service=post_service,
            discussion_settings=discussion_settings,
        )

    @provide
    def get_discussion_interaction_service(
        self,
        discussion_interaction_repository: DiscussionInteractionRepository,
        discussion_repository: DiscussionRepository,
        discussion_service: DiscussionService,
    ) -> DiscussionInteractionService:
        """Provide discussion interaction domain service."""
        return DiscussionInteractionService(
            discussion_interaction_repository=discussion_interaction_repository,
            discussion_repository=discussion_repository,
            discussion_service=discussion_service,
        )

    @provide
    def get_pitch_service(
        self,
        pitch_repository: PitchRepository,
        pitch_interaction_repository: PitchInteractionRepository,
    ) -> PitchService:
        """Provide pitch domain service."""
        return PitchService(
            pitch_repository=pitch_repository,
            pitch_interaction_repository=pitch_interaction_repository,
        )
