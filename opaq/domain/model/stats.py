"""Aggregated post statistics."""

from pydantic import Field

from opaq.domain.model.common import DomainModel


class PostStats(DomainModel):
    """Point-in-time statistics for a post, reduced from the ledger.

    Never stored: always computed on read.
    """

    likes: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
