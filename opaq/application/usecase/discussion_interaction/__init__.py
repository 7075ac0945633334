"""Discussion interaction use cases."""

from .get_discussion_interaction import (
    GetDiscussionInteractionRequest,
    GetDiscussionInteractionResponse,
    GetDiscussionInteractionUseCase,
)
from .submit_discussion_interaction import (
    SubmitDiscussionInteractionRequest,
    SubmitDiscussionInteractionResponse,
    SubmitDiscussionInteractionUseCase,
)

__all__ = [
    "GetDiscussionInteractionRequest",
    "GetDiscussionInteractionResponse",
    "GetDiscussionInteractionUseCase",
    "SubmitDiscussionInteractionRequest",
    "SubmitDiscussionInteractionResponse",
    "SubmitDiscussionInteractionUseCase",
]
