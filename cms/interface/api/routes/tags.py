"""Tag routes."""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel

from cms.application.usecase.auth import GetCurrentUserUseCase
from cms.application.usecase.common import AffectedResponse, MessageResponse
from cms.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    DeleteTagRequest,
    DeleteTagUseCase,
    GetTagRequest,
    GetTagUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    MergeTagsRequest,
    MergeTagsResponse,
    MergeTagsUseCase,
    PopularTagsRequest,
    PopularTagsResponse,
    PopularTagsUseCase,
    RemoveTagFromPostsRequest,
    RemoveTagFromPostsUseCase,
    TagDetailResponse,
    TagResponse,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from cms.domain.error import DomainError
from cms.interface.api.security import (
    authenticate,
    bearer_scheme,
    require_admin,
    require_author,
)
from cms.interface.error import http_error

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


class TagAPIRequest(BaseModel):
    """API request for creating or renaming a tag."""

    name: str


class MergeTagsAPIRequest(BaseModel):
    """API request for merging a tag into another."""

    target_tag_id: UUID


@router.get("", response_model=ListTagsResponse)
async def list_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    include_posts: bool = Query(default=False),
    include_count: bool = Query(default=False),
) -> ListTagsResponse:
    """List tags ordered by name, optionally filtered by a name search."""
    try:
        return await list_tags_use_case.execute(
            ListTagsRequest(
                search=search,
                limit=limit,
                include_posts=include_posts,
                include_count=include_count,
            )
        )
    except Exception as e:
        logfire.error("Unexpected error listing tags", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tags",
        )


# Registered before "/{slug}" so "popular" is not read as a slug
@router.get("/popular", response_model=PopularTagsResponse)
async def popular_tags(
    popular_tags_use_case: FromDishka[PopularTagsUseCase],
    limit: int = Query(default=10, ge=1, le=100),
) -> PopularTagsResponse:
    """Tags with the most published posts."""
    try:
        return await popular_tags_use_case.execute(PopularTagsRequest(limit=limit))
    except Exception as e:
        logfire.error("Unexpected error fetching popular tags", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch popular tags",
        )


@router.get("/{slug}", response_model=TagDetailResponse)
async def get_tag(
    slug: str,
    get_tag_use_case: FromDishka[GetTagUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> TagDetailResponse:
    """Get a tag with a page of its published posts."""
    try:
        return await get_tag_use_case.execute(
            GetTagRequest(slug=slug, page=page, limit=limit)
        )
    except DomainError as e:
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error fetching tag", slug=slug, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tag",
        )


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagAPIRequest,
    create_tag_use_case: FromDishka[CreateTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TagResponse:
    """Create a tag. Author role or higher."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await create_tag_use_case.execute(CreateTagRequest(name=request.name))
    except DomainError as e:
        logfire.warn("Tag creation rejected", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error creating tag", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create tag",
        )


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: UUID,
    request: TagAPIRequest,
    update_tag_use_case: FromDishka[UpdateTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TagResponse:
    """Rename a tag. Author role or higher."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await update_tag_use_case.execute(
            UpdateTagRequest(tag_id=tag_id, name=request.name)
        )
    except DomainError as e:
        logfire.warn("Tag update rejected", tag_id=str(tag_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error updating tag", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update tag",
        )


@router.delete("/{tag_id}", response_model=MessageResponse)
async def delete_tag(
    tag_id: UUID,
    delete_tag_use_case: FromDishka[DeleteTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> MessageResponse:
    """Delete a tag no post uses. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await delete_tag_use_case.execute(DeleteTagRequest(tag_id=tag_id))
    except DomainError as e:
        logfire.warn("Tag deletion rejected", tag_id=str(tag_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error deleting tag", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete tag",
        )


@router.post("/{tag_id}/remove-from-posts", response_model=AffectedResponse)
async def remove_tag_from_posts(
    tag_id: UUID,
    remove_tag_from_posts_use_case: FromDishka[RemoveTagFromPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AffectedResponse:
    """Unlink a tag from every post. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await remove_tag_from_posts_use_case.execute(
            RemoveTagFromPostsRequest(tag_id=tag_id)
        )
    except DomainError as e:
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error removing tag from posts", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove tag from posts",
        )


@router.post("/{tag_id}/merge", response_model=MergeTagsResponse)
async def merge_tags(
    tag_id: UUID,
    request: MergeTagsAPIRequest,
    merge_tags_use_case: FromDishka[MergeTagsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> MergeTagsResponse:
    """Merge a tag into another and delete it. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await merge_tags_use_case.execute(
            MergeTagsRequest(tag_id=tag_id, target_tag_id=request.target_tag_id)
        )
    except DomainError as e:
        logfire.warn("Tag merge rejected", tag_id=str(tag_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error merging tags", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to merge tags",
        )
