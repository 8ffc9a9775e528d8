"""Category routes."""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel

from cms.application.usecase.auth import GetCurrentUserUseCase
from cms.application.usecase.category import (
    CategoryDetailResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    ReassignCategoryRequest,
    ReassignCategoryUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from cms.application.usecase.common import AffectedResponse, MessageResponse
from cms.domain.error import DomainError
from cms.interface.api.security import (
    authenticate,
    bearer_scheme,
    require_admin,
    require_author,
)
from cms.interface.error import http_error

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CreateCategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str
    description: Optional[str] = None


class UpdateCategoryAPIRequest(BaseModel):
    """API request for updating a category."""

    name: Optional[str] = None
    description: Optional[str] = None


class ReassignCategoryAPIRequest(BaseModel):
    """API request for moving a category's posts."""

    new_category_id: UUID


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    list_categories_use_case: FromDishka[ListCategoriesUseCase],
    include_posts: bool = Query(default=False),
    include_count: bool = Query(default=False),
) -> ListCategoriesResponse:
    """List categories ordered by name.

    ``include_posts`` embeds the five most recent published posts of each
    category; ``include_count`` adds the number of published posts.
    """
    try:
        return await list_categories_use_case.execute(
            ListCategoriesRequest(
                include_posts=include_posts, include_count=include_count
            )
        )
    except Exception as e:
        logfire.error("Unexpected error listing categories", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch categories",
        )


@router.get("/{slug}", response_model=CategoryDetailResponse)
async def get_category(
    slug: str,
    get_category_use_case: FromDishka[GetCategoryUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> CategoryDetailResponse:
    """Get a category with a page of its published posts."""
    try:
        return await get_category_use_case.execute(
            GetCategoryRequest(slug=slug, page=page, limit=limit)
        )
    except DomainError as e:
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error fetching category", slug=slug, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch category",
        )


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    request: CreateCategoryAPIRequest,
    create_category_use_case: FromDishka[CreateCategoryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CategoryResponse:
    """Create a category. Author role or higher."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await create_category_use_case.execute(
            CreateCategoryRequest(name=request.name, description=request.description)
        )
    except DomainError as e:
        logfire.warn("Category creation rejected", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error creating category", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create category",
        )


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    request: UpdateCategoryAPIRequest,
    update_category_use_case: FromDishka[UpdateCategoryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CategoryResponse:
    """Rename or re-describe a category. Author role or higher."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_author(user)

    try:
        return await update_category_use_case.execute(
            UpdateCategoryRequest(
                category_id=category_id, **request.model_dump(exclude_unset=True)
            )
        )
    except DomainError as e:
        logfire.warn(
            "Category update rejected", category_id=str(category_id), error=str(e)
        )
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error updating category", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update category",
        )


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: UUID,
    delete_category_use_case: FromDishka[DeleteCategoryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> MessageResponse:
    """Delete a category without posts. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await delete_category_use_case.execute(
            DeleteCategoryRequest(category_id=category_id)
        )
    except DomainError as e:
        logfire.warn(
            "Category deletion rejected", category_id=str(category_id), error=str(e)
        )
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error deleting category", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete category",
        )


@router.post("/{category_id}/reassign", response_model=AffectedResponse)
async def reassign_category(
    category_id: UUID,
    request: ReassignCategoryAPIRequest,
    reassign_category_use_case: FromDishka[ReassignCategoryUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AffectedResponse:
    """Move every post of a category into another one. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await reassign_category_use_case.execute(
            ReassignCategoryRequest(
                category_id=category_id, new_category_id=request.new_category_id
            )
        )
    except DomainError as e:
        logfire.warn(
            "Category reassignment rejected",
            category_id=str(category_id),
            error=str(e),
        )
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error reassigning posts", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reassign posts",
        )
