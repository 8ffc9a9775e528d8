"""Post use cases."""

from .bulk_posts import BulkPostActionRequest, BulkPostActionUseCase
from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostUseCase
from .get_post import GetPostRequest, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .update_post import UpdatePostRequest, UpdatePostUseCase
from .view import PostResponse, PostSummary

__all__ = [
    "BulkPostActionRequest",
    "BulkPostActionUseCase",
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostResponse",
    "PostSummary",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]
