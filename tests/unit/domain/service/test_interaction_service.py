"""Unit tests for InteractionService."""

from uuid import uuid4

import pytest

from opaq.domain.error import InvalidInputError, NotFoundError, UnauthorizedError
from opaq.domain.repository import DiscussionRepository, PostRepository
from opaq.domain.service import InteractionService
from opaq.domain.value import (
    InteractionAction,
    InteractionFilter,
    PostId,
    PostStatus,
    UserId,
)
from tests.conftest import make_discussion, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _published_post(unit_env, status: PostStatus = PostStatus.PUBLISHED):
    post_repo = await unit_env.get(PostRepository)
    author_id = UserId(uuid4())
    return await post_repo.save(make_post(author_id, status=status))


class TestSubmit:
    """Tests for submit method."""

    @pytest.mark.asyncio
    async def test_like_is_idempotent(self, unit_env):
        """Submitting the same like twice should count it once."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        user_id = UserId(uuid4())

        # Act
        await service.submit(user_id, post.id, InteractionAction.LIKE, True)
        record, stats = await service.submit(
            user_id, post.id, InteractionAction.LIKE, True
        )

        # Assert
        assert record.liked is True
        assert record.last_liked_at is not None
        assert stats.likes == 1

    @pytest.mark.asyncio
    async def test_unlike_clears_flag_and_keeps_timestamp(self, unit_env):
        """Unliking should clear the flag but keep the last like time."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        user_id = UserId(uuid4())
        liked, _ = await service.submit(user_id, post.id, InteractionAction.LIKE, True)

        # Act
        record, stats = await service.submit(
            user_id, post.id, InteractionAction.LIKE, False
        )

        # Assert
        assert record.liked is False
        assert record.last_liked_at == liked.last_liked_at
        assert stats.likes == 0

    @pytest.mark.asyncio
    async def test_save_does_not_touch_like(self, unit_env):
        """Saving should leave the like flag alone."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        user_id = UserId(uuid4())
        await service.submit(user_id, post.id, InteractionAction.LIKE, True)

        # Act
        record, stats = await service.submit(
            user_id, post.id, InteractionAction.SAVE, True
        )

        # Assert
        assert record.liked is True
        assert record.saved is True
        assert stats.likes == 1
        assert stats.saves == 1

    @pytest.mark.asyncio
    async def test_views_are_cumulative(self, unit_env):
        """Every view submission should increment the view count."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        user_id = UserId(uuid4())

        # Act
        for _ in range(3):
            record, stats = await service.submit(
                user_id, post.id, InteractionAction.VIEW
            )

        # Assert
        assert record.viewed is True
        assert record.view_count == 3
        assert stats.views == 3

    @pytest.mark.asyncio
    async def test_stats_aggregate_across_users(self, unit_env):
        """Stats should be reduced from every user's record."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        alice, bob = UserId(uuid4()), UserId(uuid4())

        # Act
        await service.submit(alice, post.id, InteractionAction.LIKE, True)
        await service.submit(bob, post.id, InteractionAction.LIKE, True)
        await service.submit(bob, post.id, InteractionAction.VIEW)
        _, stats = await service.submit(alice, post.id, InteractionAction.VIEW)

        # Assert
        assert stats.likes == 2
        assert stats.views == 2
        assert stats.saves == 0

    @pytest.mark.asyncio
    async def test_anonymous_caller_raises_unauthorized(self, unit_env):
        """Anonymous submissions should be rejected before anything else."""
        service = await unit_env.get(InteractionService)

        with pytest.raises(UnauthorizedError):
            await service.submit(None, PostId(uuid4()), InteractionAction.LIKE, True)

    @pytest.mark.asyncio
    async def test_like_without_value_raises_invalid_input(self, unit_env):
        """Like and save need an explicit target value."""
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)

        with pytest.raises(InvalidInputError) as exc_info:
            await service.submit(UserId(uuid4()), post.id, InteractionAction.SAVE)

        assert exc_info.value.field == "value"

    @pytest.mark.asyncio
    async def test_unknown_post_raises_not_found(self, unit_env):
        """Submitting against a missing post should raise NotFoundError."""
        service = await unit_env.get(InteractionService)

        with pytest.raises(NotFoundError):
            await service.submit(
                UserId(uuid4()), PostId(uuid4()), InteractionAction.VIEW
            )

    @pytest.mark.asyncio
    async def test_draft_is_hidden_from_other_users(self, unit_env):
        """Another user's draft should look missing."""
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env, status=PostStatus.DRAFT)

        with pytest.raises(NotFoundError):
            await service.submit(UserId(uuid4()), post.id, InteractionAction.LIKE, True)

    @pytest.mark.asyncio
    async def test_owner_can_interact_with_own_draft(self, unit_env):
        """The author sees their own draft."""
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env, status=PostStatus.DRAFT)

        record, _ = await service.submit(post.user_id, post.id, InteractionAction.VIEW)

        assert record.view_count == 1


class TestQuery:
    """Tests for query and get_stats."""

    @pytest.mark.asyncio
    async def test_anonymous_query_returns_stats_only(self, unit_env):
        """Anonymous callers get stats and no personal record."""
        # Arrange
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)
        await service.submit(UserId(uuid4()), post.id, InteractionAction.LIKE, True)

        # Act
        stats, record = await service.query(post.id, None)

        # Assert
        assert stats.likes == 1
        assert record is None

    @pytest.mark.asyncio
    async def test_query_without_history_returns_no_record(self, unit_env):
        """A user who never interacted has no record."""
        service = await unit_env.get(InteractionService)
        post = await _published_post(unit_env)

        stats, record = await service.query(post.id, UserId(uuid4()))

        assert record is None
        assert stats.likes == 0

    @pytest.mark.asyncio
    async def test_comments_count_includes_replies(self, unit_env):
        """The comment stat counts top-level discussions and replies."""
        # Arrange
        service = await unit_env.get(InteractionService)
        discussion_repo = await unit_env.get(DiscussionRepository)
        post = await _published_post(unit_env)
        top = await discussion_repo.save(make_discussion(post.id, UserId(uuid4())))
        await discussion_repo.save(
            make_discussion(post.id, UserId(uuid4()), minutes=1, parent_id=top.id)
        )

        # Act
        stats = await service.get_stats(post.id)

        # Assert
        assert stats.comments == 2


class TestListForUser:
    """Tests for list_for_user method."""

    @pytest.mark.asyncio
    async def test_filters_liked_and_saved(self, unit_env):
        """Filters should narrow the history to liked or saved posts."""
        # Arrange
        service = await unit_env.get(InteractionService)
        liked_post = await _published_post(unit_env)
        saved_post = await _published_post(unit_env)
        user_id = UserId(uuid4())
        await service.submit(user_id, liked_post.id, InteractionAction.LIKE, True)
        await service.submit(user_id, saved_post.id, InteractionAction.SAVE, True)

        # Act
        everything = await service.list_for_user(user_id)
        liked = await service.list_for_user(user_id, InteractionFilter.LIKED)
        saved = await service.list_for_user(user_id, InteractionFilter.SAVED)

        # Assert
        assert {r.post_id for r in everything} == {liked_post.id, saved_post.id}
        assert [r.post_id for r in liked] == [liked_post.id]
        assert [r.post_id for r in saved] == [saved_post.id]

    @pytest.mark.asyncio
    async def test_anonymous_history_raises_unauthorized(self, unit_env):
        service = await unit_env.get(InteractionService)

        with pytest.raises(UnauthorizedError):
            await service.list_for_user(None)
