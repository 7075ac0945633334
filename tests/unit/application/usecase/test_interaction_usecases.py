"""Unit tests for the post interaction use cases."""

from uuid import uuid4

import pytest

from opaq.application.usecase.interaction import (
    GetInteractionsRequest,
    GetInteractionsUseCase,
    GetUserInteractionsRequest,
    GetUserInteractionsUseCase,
    SubmitInteractionRequest,
    SubmitInteractionUseCase,
)
from opaq.domain.error import UnauthorizedError
from opaq.domain.service import PostService
from opaq.domain.value import InteractionAction, InteractionFilter, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSubmitInteractionUseCase:
    """Tests for SubmitInteractionUseCase."""

    @pytest.mark.asyncio
    async def test_response_carries_state_and_stats(self, unit_env):
        """The response reflects the record and stats after the mutation."""
        # Arrange
        use_case = await unit_env.get(SubmitInteractionUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.save_post(make_post(UserId(uuid4())))
        user_id = str(uuid4())

        # Act
        response = await use_case.execute(
            SubmitInteractionRequest(
                post_id=str(post.id),
                action=InteractionAction.SAVE,
                value=True,
                user_id=user_id,
            )
        )

        # Assert
        assert response.interaction.saved is True
        assert response.interaction.liked is False
        assert response.interaction.last_saved_at is not None
        assert response.stats.saves == 1
        assert response.stats.comments == 0

    @pytest.mark.asyncio
    async def test_anonymous_submit_raises_unauthorized(self, unit_env):
        use_case = await unit_env.get(SubmitInteractionUseCase)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                SubmitInteractionRequest(
                    post_id=str(uuid4()), action=InteractionAction.VIEW
                )
            )


class TestGetInteractionsUseCase:
    """Tests for GetInteractionsUseCase."""

    @pytest.mark.asyncio
    async def test_never_interacted_yields_defaults(self, unit_env):
        """A caller without a record sees all-false state."""
        use_case = await unit_env.get(GetInteractionsUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.save_post(make_post(UserId(uuid4())))

        response = await use_case.execute(
            GetInteractionsRequest(post_id=str(post.id), user_id=str(uuid4()))
        )

        assert response.user_interaction is not None
        assert response.user_interaction.liked is False
        assert response.user_interaction.view_count == 0

    @pytest.mark.asyncio
    async def test_anonymous_gets_default_state(self, unit_env):
        """Anonymous callers see the all-false state."""
        use_case = await unit_env.get(GetInteractionsUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.save_post(make_post(UserId(uuid4())))

        response = await use_case.execute(GetInteractionsRequest(post_id=str(post.id)))

        assert response.user_interaction.liked is False
        assert response.user_interaction.saved is False
        assert response.stats.views == 0


class TestGetUserInteractionsUseCase:
    """Tests for GetUserInteractionsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_liked_posts(self, unit_env):
        # Arrange
        submit = await unit_env.get(SubmitInteractionUseCase)
        history = await unit_env.get(GetUserInteractionsUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.save_post(make_post(UserId(uuid4())))
        user_id = str(uuid4())
        await submit.execute(
            SubmitInteractionRequest(
                post_id=str(post.id),
                action=InteractionAction.LIKE,
                value=True,
                user_id=user_id,
            )
        )

        # Act
        response = await history.execute(
            GetUserInteractionsRequest(user_id=user_id, filter=InteractionFilter.LIKED)
        )

        # Assert
        assert [item.post_id for item in response.interactions] == [str(post.id)]
        assert response.page == 1
