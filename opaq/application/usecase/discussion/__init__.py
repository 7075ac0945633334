"""Discussion use cases."""

from .create_discussion import (
    CreateDiscussionRequest,
    CreateDiscussionResponse,
    CreateDiscussionUseCase,
)
from .delete_discussion import (
    DeleteDiscussionRequest,
    DeleteDiscussionResponse,
    DeleteDiscussionUseCase,
)
from .discussion_item import AuthorItem, DiscussionItem, build_discussion_items
from .list_discussions import (
    ListDiscussionsRequest,
    ListDiscussionsResponse,
    ListDiscussionsUseCase,
)
from .update_discussion import (
    UpdateDiscussionRequest,
    UpdateDiscussionResponse,
    UpdateDiscussionUseCase,
)

__all__ = [
    "AuthorItem",
    "CreateDiscussionRequest",
    "CreateDiscussionResponse",
    "CreateDiscussionUseCase",
    "DeleteDiscussionRequest",
    "DeleteDiscussionResponse",
    "DeleteDiscussionUseCase",
    "DiscussionItem",
    "ListDiscussionsRequest",
    "ListDiscussionsResponse",
    "ListDiscussionsUseCase",
    "UpdateDiscussionRequest",
    "UpdateDiscussionResponse",
    "UpdateDiscussionUseCase",
    "build_discussion_items",
]
