"""Unit tests for PitchService."""

from uuid import uuid4

import pytest

from opaq.domain.error import NotFoundError, UnauthorizedError
from opaq.domain.repository import PitchInteractionRepository, PitchRepository
from opaq.domain.service import PitchService
from opaq.domain.value import PitchId, PitchVisibility, UserId
from tests.conftest import make_pitch
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestViewTracking:
    """Tests for fetch_with_view_tracking."""

    @pytest.mark.asyncio
    async def test_view_counts_once_per_user(self, unit_env):
        """Repeat reads by the same user do not inflate views_count."""
        # Arrange
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        pitch = await pitch_repo.save(make_pitch(UserId(uuid4())))
        viewer = UserId(uuid4())

        # Act
        first, first_record = await service.fetch_with_view_tracking(pitch.id, viewer)
        second, second_record = await service.fetch_with_view_tracking(
            pitch.id, viewer
        )

        # Assert
        assert first.views_count == 1
        assert second.views_count == 1
        assert second_record.has_viewed is True
        assert second_record.first_viewed_at == first_record.first_viewed_at
        assert second_record.last_viewed_at >= first_record.last_viewed_at

    @pytest.mark.asyncio
    async def test_distinct_viewers_each_count(self, unit_env):
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        ledger = await unit_env.get(PitchInteractionRepository)
        pitch = await pitch_repo.save(make_pitch(UserId(uuid4())))

        for _ in range(3):
            latest, _ = await service.fetch_with_view_tracking(
                pitch.id, UserId(uuid4())
            )

        assert latest.views_count == 3
        assert await ledger.count_viewed(pitch.id) == 3

    @pytest.mark.asyncio
    async def test_anonymous_read_is_not_tracked(self, unit_env):
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        pitch = await pitch_repo.save(make_pitch(UserId(uuid4())))

        fetched, record = await service.fetch_with_view_tracking(pitch.id, None)

        assert record is None
        assert fetched.views_count == 0

    @pytest.mark.asyncio
    async def test_private_pitch_hidden_from_others(self, unit_env):
        """A private pitch looks missing to anyone but its owner."""
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        owner = UserId(uuid4())
        pitch = await pitch_repo.save(
            make_pitch(owner, visibility=PitchVisibility.PRIVATE)
        )

        with pytest.raises(NotFoundError):
            await service.fetch_with_view_tracking(pitch.id, UserId(uuid4()))
        with pytest.raises(NotFoundError):
            await service.fetch_with_view_tracking(pitch.id, None)

        fetched, _ = await service.fetch_with_view_tracking(pitch.id, owner)
        assert fetched.views_count == 1


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        """Two toggles return to the original state."""
        # Arrange
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        ledger = await unit_env.get(PitchInteractionRepository)
        pitch = await pitch_repo.save(make_pitch(UserId(uuid4())))
        user_id = UserId(uuid4())

        # Act
        liked, likes_after_like = await service.toggle_like(user_id, pitch.id)
        unliked, likes_after_unlike = await service.toggle_like(user_id, pitch.id)

        # Assert
        assert (liked, likes_after_like) == (True, 1)
        assert (unliked, likes_after_unlike) == (False, 0)
        assert await ledger.count_liked(pitch.id) == 0

    @pytest.mark.asyncio
    async def test_counter_matches_ledger(self, unit_env):
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        ledger = await unit_env.get(PitchInteractionRepository)
        pitch = await pitch_repo.save(make_pitch(UserId(uuid4())))
        alice, bob = UserId(uuid4()), UserId(uuid4())

        await service.toggle_like(alice, pitch.id)
        await service.toggle_like(bob, pitch.id)
        await service.toggle_like(alice, pitch.id)

        stored = await pitch_repo.find_by_id(pitch.id)
        assert stored.likes_count == await ledger.count_liked(pitch.id) == 1

    @pytest.mark.asyncio
    async def test_anonymous_like_raises_unauthorized(self, unit_env):
        service = await unit_env.get(PitchService)

        with pytest.raises(UnauthorizedError):
            await service.toggle_like(None, PitchId(uuid4()))

    @pytest.mark.asyncio
    async def test_like_private_pitch_of_other_user_is_not_found(self, unit_env):
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        pitch = await pitch_repo.save(
            make_pitch(UserId(uuid4()), visibility=PitchVisibility.PRIVATE)
        )

        with pytest.raises(NotFoundError):
            await service.toggle_like(UserId(uuid4()), pitch.id)


class TestListPitches:
    """Tests for list_pitches method."""

    @pytest.mark.asyncio
    async def test_public_plus_own_private_newest_first(self, unit_env):
        # Arrange
        service = await unit_env.get(PitchService)
        pitch_repo = await unit_env.get(PitchRepository)
        me, someone = UserId(uuid4()), UserId(uuid4())
        public = await pitch_repo.save(make_pitch(someone, minutes=0))
        mine_private = await pitch_repo.save(
            make_pitch(me, visibility=PitchVisibility.PRIVATE, minutes=10)
        )
        await pitch_repo.save(
            make_pitch(someone, visibility=PitchVisibility.PRIVATE, minutes=20)
        )

        # Act
        pitches, total = await service.list_pitches(viewer_id=me)
        anonymous, anonymous_total = await service.list_pitches()
        mine, mine_total = await service.list_pitches(viewer_id=me, mine_only=True)

        # Assert
        assert [p.id for p in pitches] == [mine_private.id, public.id]
        assert total == 2
        assert [p.id for p in anonymous] == [public.id]
        assert anonymous_total == 1
        assert [p.id for p in mine] == [mine_private.id]
        assert mine_total == 1

    @pytest.mark.asyncio
    async def test_mine_only_requires_auth(self, unit_env):
        service = await unit_env.get(PitchService)

        with pytest.raises(UnauthorizedError):
            await service.list_pitches(viewer_id=None, mine_only=True)
