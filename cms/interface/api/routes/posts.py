"""Post routes."""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from cms.application.usecase.auth import GetCurrentUserUseCase
from cms.application.usecase.common import AffectedResponse, MessageResponse
from cms.application.usecase.post import (
    BulkPostActionRequest,
    BulkPostActionUseCase,
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostResponse,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from cms.domain.error import DomainError
from cms.domain.value import PostStatus
from cms.interface.api.security import (
    authenticate,
    authenticate_optional,
    bearer_scheme,
    require_admin,
    require_author,
)
from cms.interface.error import http_error

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)

# Query value that disables the status filter
ALL_STATUSES = "all"


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(max_length=300)
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    meta_title: Optional[str] = Field(default=None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post.

    Omitted fields keep their value, except ``tags``: the post's tags are
    always replaced by the given list.
    """

    title: Optional[str] = Field(default=None, max_length=300)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[PostStatus] = None
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    meta_title: Optional[str] = Field(default=None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class BulkPostActionAPIRequest(BaseModel):
    """API request for a bulk post action."""

    action: str
    post_ids: list[UUID] = Field(default_factory=list)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    post_status: str = Query(default=PostStatus.PUBLISHED.value, alias="status"),
    category_id: Optional[UUID] = Query(default=None),
    tag: Optional[str] = Query(default=None, description="Tag slug"),
    search: Optional[str] = Query(default=None),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ListPostsResponse:
    """List posts with filtering and pagination.

    Anonymous callers and readers only see published posts; authors and
    admins may filter by any status or pass ``status=all``.
    """
    viewer = await authenticate_optional(credentials, get_current_user_use_case)

    try:
        status_filter = None if post_status == ALL_STATUSES else PostStatus(post_status)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status: {post_status}",
        )

    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                page=page,
                limit=limit,
                status=status_filter,
                category_id=category_id,
                tag=tag,
                search=search,
                viewer_id=UUID(viewer.id) if viewer else None,
            )
        )
    except DomainError as e:
        logfire.warn("Post listing rejected", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error listing posts", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch posts",
        )


@router.get("/{slug}", response_model=PostResponse)
async def get_post(
    slug: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> PostResponse:
    """Get a post by slug.

    Drafts are only visible to their author and admins.
    """
    viewer = await authenticate_optional(credentials, get_current_user_use_case)

    try:
        return await get_post_use_case.execute(
            GetPostRequest(slug=slug, viewer_id=UUID(viewer.id) if viewer else None)
        )
    except DomainError as e:
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error fetching post", slug=slug, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch post",
        )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> PostResponse:
    """Create a new post.

    Requires author role or higher.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        get_current_user_use_case: Get current user use case from DI
        credentials: Bearer token

    Returns:
        Created post with its category and tags

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(author_id=UUID(user.id), **request.model_dump())
        )
    except DomainError as e:
        logfire.warn("Post creation domain error", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error creating post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post",
        )


@router.post("/bulk", response_model=AffectedResponse)
async def bulk_post_action(
    request: BulkPostActionAPIRequest,
    bulk_post_action_use_case: FromDishka[BulkPostActionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AffectedResponse:
    """Publish, unpublish, archive or delete many posts at once. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await bulk_post_action_use_case.execute(
            BulkPostActionRequest(action=request.action, post_ids=request.post_ids)
        )
    except DomainError as e:
        logfire.warn("Bulk action rejected", action=request.action, error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error in bulk action", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to perform bulk action",
        )


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> PostResponse:
    """Update a post.

    Authors may edit their own posts; admins may edit any post.
    """
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=post_id,
                user_id=UUID(user.id),
                **request.model_dump(exclude_unset=True),
            )
        )
    except DomainError as e:
        logfire.warn("Post update domain error", post_id=str(post_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error updating post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update post",
        )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> MessageResponse:
    """Delete a post. Owner or admin."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=post_id, user_id=UUID(user.id))
        )
    except DomainError as e:
        logfire.warn("Post deletion domain error", post_id=str(post_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error deleting post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post",
        )
