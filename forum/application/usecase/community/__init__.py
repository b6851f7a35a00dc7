"""Community use cases."""

from .create_community import CreateCommunityRequest, CreateCommunityUseCase
from .list_communities import (
    CommunityItem,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)

__all__ = [
    "CommunityItem",
    "CreateCommunityRequest",
    "CreateCommunityUseCase",
    "ListCommunitiesResponse",
    "ListCommunitiesUseCase",
]
