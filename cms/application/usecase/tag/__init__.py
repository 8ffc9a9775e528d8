"""Tag use cases."""

from .create_tag import CreateTagRequest, CreateTagUseCase
from .delete_tag import DeleteTagRequest, DeleteTagUseCase
from .get_tag import GetTagRequest, GetTagUseCase, TagDetailResponse
from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase
from .merge_tags import MergeTagsRequest, MergeTagsResponse, MergeTagsUseCase
from .popular_tags import PopularTagsRequest, PopularTagsResponse, PopularTagsUseCase
from .remove_tag_from_posts import (
    RemoveTagFromPostsRequest,
    RemoveTagFromPostsUseCase,
)
from .update_tag import UpdateTagRequest, UpdateTagUseCase
from .view import TagResponse

__all__ = [
    "CreateTagRequest",
    "CreateTagUseCase",
    "DeleteTagRequest",
    "DeleteTagUseCase",
    "GetTagRequest",
    "GetTagUseCase",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "MergeTagsRequest",
    "MergeTagsResponse",
    "MergeTagsUseCase",
    "PopularTagsRequest",
    "PopularTagsResponse",
    "PopularTagsUseCase",
    "RemoveTagFromPostsRequest",
    "RemoveTagFromPostsUseCase",
    "TagDetailResponse",
    "TagResponse",
    "UpdateTagRequest",
    "UpdateTagUseCase",
]
