"""Unit tests for DiscussionService."""

from uuid import uuid4

import pytest

from opaq.domain.error import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    DiscussionRepository,
    PostRepository,
)
from opaq.domain.service import DiscussionInteractionService, DiscussionService
from opaq.domain.value import DiscussionId, DiscussionSort, PostStatus, UserId
from tests.conftest import make_discussion, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _post(unit_env, status: PostStatus = PostStatus.PUBLISHED):
    post_repo = await unit_env.get(PostRepository)
    return await post_repo.save(make_post(UserId(uuid4()), status=status))


class TestCreate:
    """Tests for create method."""

    @pytest.mark.asyncio
    async def test_create_top_level_trims_content(self, unit_env):
        """Content should be stored trimmed, with zeroed counters."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        user_id = UserId(uuid4())

        # Act
        discussion = await service.create(user_id, post.id, "  Lovely palette  ")

        # Assert
        assert discussion.content == "Lovely palette"
        assert discussion.parent_id is None
        assert discussion.likes == 0
        assert discussion.replies_count == 0
        assert not discussion.is_edited

    @pytest.mark.asyncio
    async def test_reply_increments_parent_replies_count(self, unit_env):
        """Replying should bump the parent's replies counter."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        parent = await service.create(UserId(uuid4()), post.id, "Top")

        # Act
        reply = await service.create(UserId(uuid4()), post.id, "Reply", parent.id)

        # Assert
        assert reply.parent_id == parent.id
        refreshed = await service.get_discussion(parent.id)
        assert refreshed.replies_count == 1

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_rejected(self, unit_env):
        """Nesting stops at one level."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        parent = await service.create(UserId(uuid4()), post.id, "Top")
        reply = await service.create(UserId(uuid4()), post.id, "Reply", parent.id)

        # Act & Assert
        with pytest.raises(InvalidInputError) as exc_info:
            await service.create(UserId(uuid4()), post.id, "Deeper", reply.id)
        assert exc_info.value.field == "parent_id"

    @pytest.mark.asyncio
    async def test_parent_on_another_post_is_not_found(self, unit_env):
        """A parent must belong to the same post."""
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        other_post = await _post(unit_env)
        parent = await service.create(UserId(uuid4()), other_post.id, "Elsewhere")

        with pytest.raises(NotFoundError):
            await service.create(UserId(uuid4()), post.id, "Reply", parent.id)

    @pytest.mark.asyncio
    async def test_missing_parent_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)

        with pytest.raises(NotFoundError):
            await service.create(
                UserId(uuid4()), post.id, "Reply", DiscussionId(uuid4())
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "x" * 10001])
    async def test_invalid_content_is_rejected(self, unit_env, content):
        """Blank or oversized content should raise InvalidInputError."""
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)

        with pytest.raises(InvalidInputError) as exc_info:
            await service.create(UserId(uuid4()), post.id, content)
        assert exc_info.value.field == "content"

    @pytest.mark.asyncio
    async def test_anonymous_create_raises_unauthorized(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)

        with pytest.raises(UnauthorizedError):
            await service.create(None, post.id, "Hello")

    @pytest.mark.asyncio
    async def test_create_on_foreign_draft_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env, status=PostStatus.DRAFT)

        with pytest.raises(NotFoundError):
            await service.create(UserId(uuid4()), post.id, "Hello")

    @pytest.mark.asyncio
    async def test_actions_on_foreign_draft_discussion_are_not_found(self, unit_env):
        """A stranger cannot reach a discussion on someone else's draft."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post_repo = await unit_env.get(PostRepository)
        owner = UserId(uuid4())
        post = await post_repo.save(make_post(owner, status=PostStatus.DRAFT))
        discussion = await service.create(owner, post.id, "Notes to self")
        stranger = UserId(uuid4())

        # Act / Assert
        with pytest.raises(NotFoundError):
            await service.edit(stranger, discussion.id, "Hijacked")
        with pytest.raises(NotFoundError):
            await service.pin(stranger, discussion.id, True)
        with pytest.raises(NotFoundError):
            await service.heart(stranger, discussion.id)
        with pytest.raises(NotFoundError):
            await service.delete(stranger, discussion.id)
        with pytest.raises(NotFoundError):
            await service.get_visible_discussion(discussion.id, None)

        assert await service.get_visible_discussion(discussion.id, owner) == discussion


class TestEdit:
    """Tests for edit method."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        """Editing replaces content and marks the discussion edited."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        author = UserId(uuid4())
        discussion = await service.create(author, post.id, "First draft")

        # Act
        edited = await service.edit(author, discussion.id, " Second draft ")

        # Assert
        assert edited.content == "Second draft"
        assert edited.is_edited is True

    @pytest.mark.asyncio
    async def test_post_author_cannot_edit_others_discussion(self, unit_env):
        """Only the discussion author may edit, not the post author."""
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Mine")

        with pytest.raises(ForbiddenError):
            await service.edit(post.user_id, discussion.id, "Hijacked")

    @pytest.mark.asyncio
    async def test_edit_missing_discussion_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionService)

        with pytest.raises(NotFoundError):
            await service.edit(UserId(uuid4()), DiscussionId(uuid4()), "Anything")


class TestPinAndHeart:
    """Tests for pin and heart methods."""

    @pytest.mark.asyncio
    async def test_post_author_can_pin(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Pin me")

        pinned = await service.pin(post.user_id, discussion.id, True)
        unpinned = await service.pin(post.user_id, discussion.id, False)

        assert pinned.is_pinned is True
        assert unpinned.is_pinned is False

    @pytest.mark.asyncio
    async def test_discussion_author_cannot_pin(self, unit_env):
        """Pinning is reserved to the post author."""
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        author = UserId(uuid4())
        discussion = await service.create(author, post.id, "Pin me")

        with pytest.raises(ForbiddenError):
            await service.pin(author, discussion.id, True)

    @pytest.mark.asyncio
    async def test_reply_cannot_be_pinned(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        parent = await service.create(UserId(uuid4()), post.id, "Top")
        reply = await service.create(UserId(uuid4()), post.id, "Reply", parent.id)

        with pytest.raises(InvalidInputError):
            await service.pin(post.user_id, reply.id, True)

    @pytest.mark.asyncio
    async def test_heart_toggles(self, unit_env):
        """Each heart call flips the flag."""
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Heart me")

        first = await service.heart(post.user_id, discussion.id)
        second = await service.heart(post.user_id, discussion.id)

        assert first.is_hearted is True
        assert second.is_hearted is False

    @pytest.mark.asyncio
    async def test_heart_by_other_user_is_forbidden(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Heart me")

        with pytest.raises(ForbiddenError):
            await service.heart(UserId(uuid4()), discussion.id)


class TestDelete:
    """Tests for delete method."""

    @pytest.mark.asyncio
    async def test_delete_cascades_replies_and_likes(self, unit_env):
        """Deleting a top-level discussion removes its replies and their likes."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        like_service = await unit_env.get(DiscussionInteractionService)
        discussion_repo = await unit_env.get(DiscussionRepository)
        ledger = await unit_env.get(DiscussionInteractionRepository)
        post = await _post(unit_env)
        author = UserId(uuid4())
        top = await service.create(author, post.id, "Top")
        reply = await service.create(UserId(uuid4()), post.id, "Reply", top.id)
        other = await service.create(UserId(uuid4()), post.id, "Unrelated")
        fan = UserId(uuid4())
        await like_service.set_like(fan, top.id, True)
        await like_service.set_like(fan, reply.id, True)
        await like_service.set_like(fan, other.id, True)

        # Act
        deleted = await service.delete(author, top.id)

        # Assert
        assert set(deleted) == {top.id, reply.id}
        assert await discussion_repo.find_by_id(top.id) is None
        assert await discussion_repo.find_by_id(reply.id) is None
        assert await ledger.find_by_user_and_discussion(fan, top.id) is None
        assert await ledger.find_by_user_and_discussion(fan, reply.id) is None
        assert await ledger.count_liked(other.id) == 1

    @pytest.mark.asyncio
    async def test_deleting_reply_decrements_parent(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        top = await service.create(UserId(uuid4()), post.id, "Top")
        replier = UserId(uuid4())
        reply = await service.create(replier, post.id, "Reply", top.id)

        deleted = await service.delete(replier, reply.id)

        assert deleted == [reply.id]
        refreshed = await service.get_discussion(top.id)
        assert refreshed.replies_count == 0

    @pytest.mark.asyncio
    async def test_post_author_can_delete_any_discussion(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Spam")

        deleted = await service.delete(post.user_id, discussion.id)

        assert deleted == [discussion.id]

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env)
        discussion = await service.create(UserId(uuid4()), post.id, "Mine")

        with pytest.raises(ForbiddenError):
            await service.delete(UserId(uuid4()), discussion.id)

    @pytest.mark.asyncio
    async def test_anonymous_delete_raises_unauthorized(self, unit_env):
        service = await unit_env.get(DiscussionService)

        with pytest.raises(UnauthorizedError):
            await service.delete(None, DiscussionId(uuid4()))


class TestListDiscussions:
    """Tests for list_discussions sorting and paging."""

    async def _seed(self, unit_env):
        discussion_repo = await unit_env.get(DiscussionRepository)
        post = await _post(unit_env)
        author = UserId(uuid4())
        old = await discussion_repo.save(
            make_discussion(post.id, author, minutes=0, likes=5, replies_count=0)
        )
        mid = await discussion_repo.save(
            make_discussion(
                post.id, author, minutes=10, likes=1, replies_count=3, is_pinned=True
            )
        )
        new = await discussion_repo.save(
            make_discussion(post.id, author, minutes=20, likes=2, replies_count=1)
        )
        await discussion_repo.save(
            make_discussion(post.id, author, minutes=30, parent_id=old.id)
        )
        return post, old, mid, new

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sort, expected",
        [
            (DiscussionSort.NEWEST, ["mid", "new", "old"]),
            (DiscussionSort.OLDEST, ["old", "mid", "new"]),
            (DiscussionSort.TOP, ["old", "new", "mid"]),
            (DiscussionSort.REPLIES, ["mid", "new", "old"]),
        ],
    )
    async def test_sort_orders(self, unit_env, sort, expected):
        """Top-level listing honours each sort; replies are excluded."""
        # Arrange
        service = await unit_env.get(DiscussionService)
        post, old, mid, new = await self._seed(unit_env)
        names = {old.id: "old", mid.id: "mid", new.id: "new"}

        # Act
        discussions, total = await service.list_discussions(post.id, sort=sort)

        # Assert
        assert [names[d.id] for d in discussions] == expected
        assert total == 3

    @pytest.mark.asyncio
    async def test_replies_listing_and_paging(self, unit_env):
        """Passing parent_id lists that discussion's replies."""
        service = await unit_env.get(DiscussionService)
        post, old, _, _ = await self._seed(unit_env)

        replies, total = await service.list_discussions(post.id, parent_id=old.id)
        page, _ = await service.list_discussions(post.id, limit=2, offset=2)

        assert total == 1
        assert replies[0].parent_id == old.id
        assert len(page) == 1

    @pytest.mark.asyncio
    async def test_listing_foreign_draft_is_not_found(self, unit_env):
        service = await unit_env.get(DiscussionService)
        post = await _post(unit_env, status=PostStatus.DRAFT)

        with pytest.raises(NotFoundError):
            await service.list_discussions(post.id, viewer_id=None)
