"""Walk-through of a post's engagement across likes, views and discussions."""

from uuid import uuid4

import pytest

from opaq.domain.error import NotFoundError
from opaq.domain.repository import DiscussionInteractionRepository, PostRepository
from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    InteractionService,
)
from opaq.domain.value import InteractionAction, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_engagement_lifecycle(unit_env):
    """Stats, counters and ledgers agree at every step."""
    interactions = await unit_env.get(InteractionService)
    discussions = await unit_env.get(DiscussionService)
    discussion_likes = await unit_env.get(DiscussionInteractionService)
    post_repo = await unit_env.get(PostRepository)
    ledger = await unit_env.get(DiscussionInteractionRepository)

    artist = UserId(uuid4())
    alice, bob = UserId(uuid4()), UserId(uuid4())
    post = await post_repo.save(make_post(artist))

    # Alice likes twice and views twice; Bob saves
    await interactions.submit(alice, post.id, InteractionAction.LIKE, True)
    await interactions.submit(alice, post.id, InteractionAction.LIKE, True)
    await interactions.submit(alice, post.id, InteractionAction.VIEW)
    await interactions.submit(alice, post.id, InteractionAction.VIEW)
    _, stats = await interactions.submit(bob, post.id, InteractionAction.SAVE, True)
    assert (stats.likes, stats.saves, stats.views, stats.comments) == (1, 1, 2, 0)

    # Bob opens a thread, Alice replies and likes it, the artist pins and hearts
    thread = await discussions.create(bob, post.id, "Which pigments?")
    reply = await discussions.create(alice, post.id, "Ultramarine", thread.id)
    await discussion_likes.set_like(alice, thread.id, True)
    await discussion_likes.set_like(artist, thread.id, True)
    await discussions.pin(artist, thread.id, True)
    hearted = await discussions.heart(artist, thread.id)

    assert hearted.is_pinned and hearted.is_hearted
    assert hearted.likes == await ledger.count_liked(thread.id) == 2
    assert hearted.replies_count == 1
    stats = await interactions.get_stats(post.id)
    assert stats.comments == 2

    # The artist removes the thread: reply and likes go with it
    deleted = await discussions.delete(artist, thread.id)
    assert set(deleted) == {thread.id, reply.id}
    for liker in (alice, artist):
        assert await ledger.find_by_user_and_discussion(liker, thread.id) is None
    with pytest.raises(NotFoundError):
        await discussions.get_discussion(reply.id)

    stats, record = await interactions.query(post.id, alice)
    assert stats.comments == 0
    assert record.liked is True
    assert record.view_count == 2
