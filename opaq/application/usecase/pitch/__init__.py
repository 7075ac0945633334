"""Pitch use cases."""

from .get_pitch import (
    GetPitchRequest,
    GetPitchResponse,
    GetPitchUseCase,
    PitchInteractionItem,
    PitchItem,
)
from .like_pitch import LikePitchRequest, LikePitchResponse, LikePitchUseCase
from .list_pitches import ListPitchesRequest, ListPitchesResponse, ListPitchesUseCase

__all__ = [
    "GetPitchRequest",
    "GetPitchResponse",
    "GetPitchUseCase",
    "LikePitchRequest",
    "LikePitchResponse",
    "LikePitchUseCase",
    "ListPitchesRequest",
    "ListPitchesResponse",
    "ListPitchesUseCase",
    "PitchInteractionItem",
    "PitchItem",
]
