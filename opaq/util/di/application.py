"""Application layer DI providers."""

from dishka import Scope, provide

from opaq.application.usecase.discussion import (
    CreateDiscussionUseCase,
    DeleteDiscussionUseCase,
    ListDiscussionsUseCase,
    UpdateDiscussionUseCase,
)
from opaq.application.usecase.discussion_interaction import (
    GetDiscussionInteractionUseCase,
    SubmitDiscussionInteractionUseCase,
)
from opaq.application.usecase.interaction import (
    GetInteractionsUseCase,
    GetUserInteractionsUseCase,
    SubmitInteractionUseCase,
)
from opaq.application.usecase.pitch import (
    GetPitchUseCase,
    LikePitchUseCase,
    ListPitchesUseCase,
)
from opaq.config import DiscussionSettings
from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    InteractionService,
    PitchService,
    UserService,
)
from opaq.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post interaction use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_interaction_use_case(
        self, interaction_service: InteractionService
    ) -> SubmitInteractionUseCase:
        """Provide submit interaction use case."""
        return SubmitInteractionUseCase(interaction_service=interaction_service)

    @provide(scope=Scope.REQUEST)
    def get_get_interactions_use_case(
        self, interaction_service: InteractionService
    ) -> GetInteractionsUseCase:
        """Provide get interactions use case."""
        return GetInteractionsUseCase(interaction_service=interaction_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_interactions_use_case(
        self, interaction_service: InteractionService
    ) -> GetUserInteractionsUseCase:
        """Provide get user interactions use case."""
        return GetUserInteractionsUseCase(interaction_service=interaction_service)

    # Discussion use cases
    @provide(scope=Scope.REQUEST)
    def get_create_discussion_use_case(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
    ) -> CreateDiscussionUseCase:
        """Provide create discussion use case."""
        return CreateDiscussionUseCase(
            discussion_service=discussion_service,
            discussion_interaction_service=discussion_interaction_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_discussions_use_case(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
        discussion_settings: DiscussionSettings,
    ) -> ListDiscussionsUseCase:
        """Provide list discussions use case."""
        return ListDiscussionsUseCase(
            discussion_service=discussion_service,
            discussion_interaction_service=discussion_interaction_service,
            user_service=user_service,
            discussion_settings=discussion_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_discussion_use_case(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
    ) -> UpdateDiscussionUseCase:
        """Provide update discussion use case."""
        return UpdateDiscussionUseCase(
            discussion_service=discussion_service,
            discussion_interaction_service=discussion_interaction_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_discussion_use_case(
        self, discussion_service: DiscussionService
    ) -> DeleteDiscussionUseCase:
        """Provide delete discussion use case."""
        return DeleteDiscussionUseCase(discussion_service=discussion_service)

    # Discussion interaction use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_discussion_interaction_use_case(
        self,
        discussion_interaction_service: DiscussionInteractionService,
        discussion_service: DiscussionService,
    ) -> SubmitDiscussionInteractionUseCase:
        """Provide submit discussion interaction use case."""
        return SubmitDiscussionInteractionUseCase(
            discussion_interaction_service=discussion_interaction_service,
            discussion_service=discussion_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_discussion_interaction_use_case(
        self, discussion_interaction_service: DiscussionInteractionService
    ) -> GetDiscussionInteractionUseCase:
        """Provide get discussion interaction use case."""
        return GetDiscussionInteractionUseCase(
            discussion_interaction_service=discussion_interaction_service
        )

    # Pitch use cases
    @provide(scope=Scope.REQUEST)
    def get_get_pitch_use_case(self, pitch_service: PitchService) -> GetPitchUseCase:
        """Provide get pitch use case."""
        return GetPitchUseCase(pitch_service=pitch_service)

    @provide(scope=Scope.REQUEST)
    def get_like_pitch_use_case(self, pitch_service: PitchService) -> LikePitchUseCase:
        """Provide like pitch use case."""
        return LikePitchUseCase(pitch_service=pitch_service)

    @provide(scope=Scope.REQUEST)
    def get_list_pitches_use_case(
        self, pitch_service: PitchService
    ) -> ListPitchesUseCase:
        """Provide list pitches use case."""
        return ListPitchesUseCase(pitch_service=pitch_service)
