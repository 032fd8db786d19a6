"""
Category endpoints. Reads are public, writes require ADMIN role.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import optional_admin, require_admin
from bodegon_api.routers._common.pagination import get_category_query
from bodegon_api.services.domain import CategoryService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    CategoryCreate,
    CategoryListQuery,
    CategoryOutput,
    CategoryUpdate,
)
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=Page[CategoryOutput])
def list_categories(
    query: CategoryListQuery = Depends(get_category_query),
    db: Session = Depends(get_db),
    user: User | None = Depends(optional_admin),
) -> Page[CategoryOutput]:
    """
    List categories, newest first.

    Public for the menu site; anonymous callers never see deleted rows.
    """
    if user is None:
        query = query.model_copy(update={"include_deleted": False})
    return CategoryService(db).list(query)


@router.get("/{category_id}", response_model=CategoryOutput)
def get_category(
    category_id: str,
    include_subcategories: bool = Query(False),
    db: Session = Depends(get_db),
    user: User | None = Depends(optional_admin),
) -> CategoryOutput:
    """Get a category. Deleted ones are only visible to admins."""
    return CategoryService(db).get(
        category_id, expand=include_subcategories, live_only=user is None
    )


@router.post("", response_model=CategoryOutput, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Create a category. The slug is derived from the name."""
    return CategoryService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{category_id}", response_model=CategoryOutput)
def update_category(
    category_id: str,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Partially update a category."""
    return CategoryService(db).update(
        category_id, body.model_dump(exclude_unset=True), actor_id=user.id
    )


@router.delete("/{category_id}", response_model=CategoryOutput)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Soft delete a category with no live subcategories or dishes."""
    return CategoryService(db).delete(category_id, actor_id=user.id)


@router.patch("/{category_id}/restore", response_model=CategoryOutput)
def restore_category(
    category_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Restore a soft-deleted category."""
    return CategoryService(db).restore(category_id, actor_id=user.id)
