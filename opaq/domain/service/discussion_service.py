"""Discussion domain service."""

from uuid import uuid4

import logfire

from opaq.config import DiscussionSettings
from opaq.domain.error import ForbiddenError, InvalidInputError, NotFoundError
from opaq.domain.model import Discussion, Post
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    DiscussionRepository,
)
from opaq.domain.value import DiscussionId, DiscussionSort, PostId, UserId

from .base import Service
from .post_service import PostService


class DiscussionService(Service):
    """Domain service for the discussion tree.

    Rules:
    - one level of nesting; a reply's parent must be top-level
    - content edits are reserved to the discussion author
    - pin and heart are reserved to the author of the post
    - delete is allowed to the discussion author or the post author, and
      removes the replies and every like record of the removed discussions
    """

    def __init__(
        self,
        discussion_repository: DiscussionRepository,
        discussion_interaction_repository: DiscussionInteractionRepository,
        post_service: PostService,
        discussion_settings: DiscussionSettings,
    ) -> None:
        """Initialize discussion service.

        Args:
            discussion_repository: Discussion repository
            discussion_interaction_repository: Discussion interaction repository
            post_service: Post domain service
            discussion_settings: Content limits
        """
        self.discussion_repository = discussion_repository
        self.discussion_interaction_repository = discussion_interaction_repository
        self.post_service = post_service
        self.discussion_settings = discussion_settings

    def _clean_content(self, content: str | None) -> str:
        content = (content or "").strip()
        if not content:
            raise InvalidInputError("Content is required", field="content")
        if len(content) > self.discussion_settings.max_content_length:
            raise InvalidInputError(
                f"Content must be at most "
                f"{self.discussion_settings.max_content_length} characters",
                field="content",
            )
        return content

    async def get_discussion(self, discussion_id: DiscussionId) -> Discussion:
        """Get a discussion by ID.

        Raises:
            NotFoundError: If the discussion does not exist
        """
        with logfire.span(
            "discussion_service.get_discussion", discussion_id=str(discussion_id)
        ):
            discussion = await self.discussion_repository.find_by_id(discussion_id)
            if discussion is None:
                logfire.warn("Discussion not found", discussion_id=str(discussion_id))
                raise NotFoundError("Discussion", str(discussion_id))
            return discussion

    async def get_visible_discussion(
        self, discussion_id: DiscussionId, viewer_id: UserId | None
    ) -> Discussion:
        """Get a discussion whose post the viewer is allowed to see.

        Discussions on another user's draft are reported as missing.

        Raises:
            NotFoundError: If the discussion does not exist or its post is
                not visible to the viewer
        """
        discussion = await self.get_discussion(discussion_id)
        post = await self.post_service.get_post_by_id(discussion.post_id)
        if post is None or not post.is_visible_to(viewer_id):
            logfire.warn(
                "Discussion on hidden post",
                discussion_id=str(discussion_id),
                post_id=str(discussion.post_id),
            )
            raise NotFoundError("Discussion", str(discussion_id))
        return discussion

    async def _is_post_author(self, post_id: PostId, user_id: UserId) -> bool:
        post: Post | None = await self.post_service.get_post_by_id(post_id)
        return post is not None and post.user_id == user_id

    async def create(
        self,
        user_id: UserId | None,
        post_id: PostId,
        content: str,
        parent_id: DiscussionId | None = None,
    ) -> Discussion:
        """Create a top-level discussion or a reply.

        Args:
            user_id: Caller
            post_id: Post the discussion belongs to
            content: Discussion text, trimmed before storing
            parent_id: Top-level discussion being replied to

        Returns:
            Created discussion

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If content is empty or too long, or the parent
                is itself a reply
            NotFoundError: If the post is not visible, or the parent does not
                exist on the same post
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "discussion_service.create",
            user_id=str(user_id),
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = self._clean_content(content)
            await self.post_service.get_visible_post(post_id, user_id)

            if parent_id is not None:
                parent = await self.discussion_repository.find_by_id(parent_id)
                if parent is None or parent.post_id != post_id:
                    logfire.warn(
                        "Reply to unknown parent",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Discussion", str(parent_id))
                if parent.is_reply:
                    raise InvalidInputError(
                        "Replies can only be made to top-level discussions",
                        field="parent_id",
                    )

            discussion = await self.discussion_repository.save(
                Discussion(
                    id=DiscussionId(uuid4()),
                    post_id=post_id,
                    user_id=user_id,
                    content=content,
                    parent_id=parent_id,
                )
            )

            if parent_id is not None:
                await self.discussion_repository.adjust_replies_count(parent_id, 1)

            logfire.info(
                "Discussion created",
                discussion_id=str(discussion.id),
                post_id=str(post_id),
                is_reply=discussion.is_reply,
            )
            return discussion

    async def edit(
        self, user_id: UserId | None, discussion_id: DiscussionId, content: str
    ) -> Discussion:
        """Replace a discussion's content and mark it edited.

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If content is empty or too long
            NotFoundError: If the discussion does not exist or is on a hidden post
            ForbiddenError: If the caller is not the discussion author
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "discussion_service.edit",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
        ):
            content = self._clean_content(content)
            discussion = await self.get_visible_discussion(discussion_id, user_id)

            if discussion.user_id != user_id:
                logfire.warn(
                    "Edit by non-author",
                    discussion_id=str(discussion_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError(
                    "edit", "discussion", str(discussion_id), str(user_id)
                )

            updated = await self.discussion_repository.update_content(
                discussion_id, content
            )
            if updated is None:
                raise NotFoundError("Discussion", str(discussion_id))

            logfire.info("Discussion edited", discussion_id=str(discussion_id))
            return updated

    async def pin(
        self, user_id: UserId | None, discussion_id: DiscussionId, value: bool
    ) -> Discussion:
        """Set the pinned flag of a top-level discussion.

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the discussion does not exist or is on a hidden post
            InvalidInputError: If the discussion is a reply
            ForbiddenError: If the caller is not the post author
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "discussion_service.pin",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
            value=value,
        ):
            discussion = await self.get_visible_discussion(discussion_id, user_id)

            if discussion.is_reply:
                raise InvalidInputError(
                    "Only top-level discussions can be pinned", field="action"
                )

            if not await self._is_post_author(discussion.post_id, user_id):
                logfire.warn(
                    "Pin by non-post-author",
                    discussion_id=str(discussion_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError("pin", "discussion", str(discussion_id), str(user_id))

            updated = await self.discussion_repository.set_pinned(discussion_id, value)
            if updated is None:
                raise NotFoundError("Discussion", str(discussion_id))

            logfire.info(
                "Discussion pin updated", discussion_id=str(discussion_id), pinned=value
            )
            return updated

    async def heart(
        self, user_id: UserId | None, discussion_id: DiscussionId
    ) -> Discussion:
        """Toggle the hearted flag.

        Unlike likes, a heart is a toggle: each call flips the current state.

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the discussion does not exist or is on a hidden post
            ForbiddenError: If the caller is not the post author
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "discussion_service.heart",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
        ):
            discussion = await self.get_visible_discussion(discussion_id, user_id)

            if not await self._is_post_author(discussion.post_id, user_id):
                logfire.warn(
                    "Heart by non-post-author",
                    discussion_id=str(discussion_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError(
                    "heart", "discussion", str(discussion_id), str(user_id)
                )

            updated = await self.discussion_repository.toggle_hearted(discussion_id)
            if updated is None:
                raise NotFoundError("Discussion", str(discussion_id))

            logfire.info(
                "Discussion heart toggled",
                discussion_id=str(discussion_id),
                hearted=updated.is_hearted,
            )
            return updated

    async def delete(
        self, user_id: UserId | None, discussion_id: DiscussionId
    ) -> list[DiscussionId]:
        """Delete a discussion, its replies and their like records.

        Returns:
            IDs of every deleted discussion

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the discussion does not exist or is on a hidden post
            ForbiddenError: If the caller is neither the discussion author nor
                the post author
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "discussion_service.delete",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
        ):
            discussion = await self.get_visible_discussion(discussion_id, user_id)

            if discussion.user_id != user_id and not await self._is_post_author(
                discussion.post_id, user_id
            ):
                logfire.warn(
                    "Delete by non-owner",
                    discussion_id=str(discussion_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError(
                    "delete", "discussion", str(discussion_id), str(user_id)
                )

            thread_ids = await self.discussion_repository.find_thread_ids(discussion_id)
            removed = await self.discussion_interaction_repository.delete_by_discussions(
                thread_ids
            )
            deleted_ids = await self.discussion_repository.delete_thread(discussion_id)

            if discussion.parent_id is not None:
                await self.discussion_repository.adjust_replies_count(
                    discussion.parent_id, -1
                )

            logfire.info(
                "Discussion deleted",
                discussion_id=str(discussion_id),
                deleted_discussions=len(deleted_ids),
                deleted_interactions=removed,
            )
            return deleted_ids

    async def list_discussions(
        self,
        post_id: PostId,
        viewer_id: UserId | None = None,
        parent_id: DiscussionId | None = None,
        sort: DiscussionSort = DiscussionSort.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Discussion], int]:
        """List one page of top-level discussions or of a discussion's replies.

        Returns:
            (discussions on the page, total matching discussions)

        Raises:
            NotFoundError: If the post is not visible to the viewer
        """
        with logfire.span(
            "discussion_service.list_discussions",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            await self.post_service.get_visible_post(post_id, viewer_id)

            discussions = await self.discussion_repository.find_by_post(
                post_id, parent_id=parent_id, sort=sort, limit=limit, offset=offset
            )
            total = await self.discussion_repository.count_by_post(
                post_id, parent_id=parent_id
            )
            logfire.info(
                "Discussions retrieved",
                post_id=str(post_id),
                count=len(discussions),
                total=total,
            )
            return discussions, total
