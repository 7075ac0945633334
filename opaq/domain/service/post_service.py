"""Post domain service."""

import logfire

from opaq.domain.error import NotFoundError
from opaq.domain.model.post import Post
from opaq.domain.repository import PostRepository
from opaq.domain.value import PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations.

    Posts are owned by the content store; this service only reads them to
    validate existence, ownership and visibility.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID, regardless of status.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_visible_post(self, post_id: PostId, viewer_id: UserId | None) -> Post:
        """Get a post the viewer is allowed to see.

        Args:
            post_id: Post ID
            viewer_id: Caller, None when anonymous

        Returns:
            The post

        Raises:
            NotFoundError: If the post does not exist or is another user's draft
        """
        post = await self.get_post_by_id(post_id)
        if post is None or not post.is_visible_to(viewer_id):
            raise NotFoundError("Post", str(post_id))
        return post
