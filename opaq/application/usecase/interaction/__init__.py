"""Post interaction use cases."""

from .get_interactions import (
    GetInteractionsRequest,
    GetInteractionsResponse,
    GetInteractionsUseCase,
)
from .get_user_interactions import (
    GetUserInteractionsRequest,
    GetUserInteractionsResponse,
    GetUserInteractionsUseCase,
    UserInteractionItem,
)
from .submit_interaction import (
    InteractionState,
    StatsItem,
    SubmitInteractionRequest,
    SubmitInteractionResponse,
    SubmitInteractionUseCase,
)

__all__ = [
    "GetInteractionsRequest",
    "GetInteractionsResponse",
    "GetInteractionsUseCase",
    "GetUserInteractionsRequest",
    "GetUserInteractionsResponse",
    "GetUserInteractionsUseCase",
    "InteractionState",
    "StatsItem",
    "SubmitInteractionRequest",
    "SubmitInteractionResponse",
    "SubmitInteractionUseCase",
    "UserInteractionItem",
]
