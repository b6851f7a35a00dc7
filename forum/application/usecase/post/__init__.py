"""Post use cases."""

from .common import PostItem
from .create_post import CreatePostRequest, CreatePostUseCase
from .get_post import GetPostRequest, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .search_posts import SearchPostsRequest, SearchPostsResponse, SearchPostsUseCase

__all__ = [
    "PostItem",
    "CreatePostRequest",
    "CreatePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "SearchPostsRequest",
    "SearchPostsResponse",
    "SearchPostsUseCase",
]
