"""Category use cases."""

from .create_category import CreateCategoryRequest, CreateCategoryUseCase
from .delete_category import DeleteCategoryRequest, DeleteCategoryUseCase
from .get_category import (
    CategoryDetailResponse,
    GetCategoryRequest,
    GetCategoryUseCase,
)
from .list_categories import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .reassign_category import ReassignCategoryRequest, ReassignCategoryUseCase
from .update_category import UpdateCategoryRequest, UpdateCategoryUseCase
from .view import CategoryResponse

__all__ = [
    "CategoryDetailResponse",
    "CategoryResponse",
    "CreateCategoryRequest",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryUseCase",
    "ListCategoriesRequest",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "ReassignCategoryRequest",
    "ReassignCategoryUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryUseCase",
]
