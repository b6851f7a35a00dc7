"""Vote use cases."""

from .apply_vote import ApplyVoteRequest, ApplyVoteResponse, ApplyVoteUseCase

__all__ = [
    "ApplyVoteRequest",
    "ApplyVoteResponse",
    "ApplyVoteUseCase",
]
