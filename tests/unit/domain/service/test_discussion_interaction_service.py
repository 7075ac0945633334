"""Unit tests for DiscussionInteractionService."""

from uuid import uuid4

import pytest

from opaq.domain.error import InvalidInputError, NotFoundError, UnauthorizedError
from opaq.domain.repository import DiscussionInteractionRepository, PostRepository
from opaq.domain.service import DiscussionInteractionService, DiscussionService
from opaq.domain.value import DiscussionId, PostStatus, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _discussion(unit_env):
    post_repo = await unit_env.get(PostRepository)
    discussion_service = await unit_env.get(DiscussionService)
    post = await post_repo.save(make_post(UserId(uuid4())))
    return await discussion_service.create(UserId(uuid4()), post.id, "Nice work")


class TestSetLike:
    """Tests for set_like method."""

    @pytest.mark.asyncio
    async def test_repeated_like_counts_once(self, unit_env):
        """The likes counter follows the ledger, not the number of calls."""
        # Arrange
        service = await unit_env.get(DiscussionInteractionService)
        ledger = await unit_env.get(DiscussionInteractionRepository)
        discussion = await _discussion(unit_env)
        user_id = UserId(uuid4())

        # Act
        await service.set_like(user_id, discussion.id, True)
        record, refreshed = await service.set_like(user_id, discussion.id, True)

        # Assert
        assert record.liked is True
        assert refreshed.likes == 1
        assert refreshed.likes == await ledger.count_liked(discussion.id)

    @pytest.mark.asyncio
    async def test_counter_matches_ledger_across_users(self, unit_env):
        """Likes and unlikes from several users keep the counter consistent."""
        # Arrange
        service = await unit_env.get(DiscussionInteractionService)
        ledger = await unit_env.get(DiscussionInteractionRepository)
        discussion = await _discussion(unit_env)
        alice, bob, carol = (UserId(uuid4()) for _ in range(3))

        # Act
        await service.set_like(alice, discussion.id, True)
        await service.set_like(bob, discussion.id, True)
        await service.set_like(carol, discussion.id, False)
        await service.set_like(alice, discussion.id, False)
        await service.set_like(alice, discussion.id, False)
        _, refreshed = await service.set_like(carol, discussion.id, True)

        # Assert
        assert refreshed.likes == 2
        assert await ledger.count_liked(discussion.id) == 2

    @pytest.mark.asyncio
    async def test_unlike_without_prior_like_keeps_zero(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)
        discussion = await _discussion(unit_env)

        record, refreshed = await service.set_like(
            UserId(uuid4()), discussion.id, False
        )

        assert record.liked is False
        assert refreshed.likes == 0

    @pytest.mark.asyncio
    async def test_like_missing_discussion_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)

        with pytest.raises(NotFoundError):
            await service.set_like(UserId(uuid4()), DiscussionId(uuid4()), True)

    @pytest.mark.asyncio
    async def test_anonymous_like_raises_unauthorized(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)

        with pytest.raises(UnauthorizedError):
            await service.set_like(None, DiscussionId(uuid4()), True)

    @pytest.mark.asyncio
    async def test_anonymous_like_without_value_raises_unauthorized(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)

        with pytest.raises(UnauthorizedError):
            await service.set_like(None, DiscussionId(uuid4()), None)

    @pytest.mark.asyncio
    async def test_like_without_value_is_invalid(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)
        discussion = await _discussion(unit_env)

        with pytest.raises(InvalidInputError):
            await service.set_like(UserId(uuid4()), discussion.id, None)


class TestLikedLookups:
    """Tests for is_liked and get_liked_ids."""

    @pytest.mark.asyncio
    async def test_anonymous_viewer_likes_nothing(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)
        discussion = await _discussion(unit_env)

        assert await service.is_liked(None, discussion.id) is False
        assert await service.get_liked_ids(None, [discussion.id]) == set()

    @pytest.mark.asyncio
    async def test_liked_ids_excludes_unliked(self, unit_env):
        """Only records whose flag is still set are returned."""
        # Arrange
        service = await unit_env.get(DiscussionInteractionService)
        first = await _discussion(unit_env)
        second = await _discussion(unit_env)
        user_id = UserId(uuid4())
        await service.set_like(user_id, first.id, True)
        await service.set_like(user_id, second.id, True)
        await service.set_like(user_id, second.id, False)

        # Act
        liked = await service.get_liked_ids(user_id, [first.id, second.id])

        # Assert
        assert liked == {first.id}
        assert await service.is_liked(user_id, second.id) is False


class TestDraftPosts:
    """Discussions on a draft only exist for the draft's owner."""

    async def _draft_discussion(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        discussion_service = await unit_env.get(DiscussionService)
        owner = UserId(uuid4())
        post = await post_repo.save(make_post(owner, status=PostStatus.DRAFT))
        discussion = await discussion_service.create(owner, post.id, "Notes to self")
        return owner, discussion

    @pytest.mark.asyncio
    async def test_stranger_like_on_draft_is_not_found(self, unit_env):
        # Arrange
        service = await unit_env.get(DiscussionInteractionService)
        discussion_service = await unit_env.get(DiscussionService)
        _, discussion = await self._draft_discussion(unit_env)

        # Act / Assert
        with pytest.raises(NotFoundError):
            await service.set_like(UserId(uuid4()), discussion.id, True)

        unchanged = await discussion_service.get_discussion(discussion.id)
        assert unchanged.likes == 0

    @pytest.mark.asyncio
    async def test_like_state_on_foreign_draft_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)
        _, discussion = await self._draft_discussion(unit_env)

        with pytest.raises(NotFoundError):
            await service.is_liked(UserId(uuid4()), discussion.id)
        with pytest.raises(NotFoundError):
            await service.is_liked(None, discussion.id)

    @pytest.mark.asyncio
    async def test_owner_can_like_on_own_draft(self, unit_env):
        service = await unit_env.get(DiscussionInteractionService)
        owner, discussion = await self._draft_discussion(unit_env)

        _, refreshed = await service.set_like(owner, discussion.id, True)

        assert refreshed.likes == 1
        assert await service.is_liked(owner, discussion.id) is True
