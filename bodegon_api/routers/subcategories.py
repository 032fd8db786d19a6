"""
Subcategory management endpoints. Requires ADMIN role.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_subcategory_query
from bodegon_api.services.domain import SubcategoryService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    SubcategoryCreate,
    SubcategoryListQuery,
    SubcategoryOutput,
    SubcategoryUpdate,
)
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/subcategories", tags=["subcategories"])


@router.get("", response_model=Page[SubcategoryOutput])
def list_subcategories(
    query: SubcategoryListQuery = Depends(get_subcategory_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> Page[SubcategoryOutput]:
    """List subcategories, optionally filtered by category."""
    return SubcategoryService(db).list(query)


@router.get("/{subcategory_id}", response_model=SubcategoryOutput)
def get_subcategory(
    subcategory_id: str,
    include_category: bool = Query(False),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> SubcategoryOutput:
    return SubcategoryService(db).get(subcategory_id, expand=include_category)


@router.post("", response_model=SubcategoryOutput, status_code=status.HTTP_201_CREATED)
def create_subcategory(
    body: SubcategoryCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> SubcategoryOutput:
    """Create a subcategory under a live category."""
    return SubcategoryService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{subcategory_id}", response_model=SubcategoryOutput)
def update_subcategory(
    subcategory_id: str,
    body: SubcategoryUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> SubcategoryOutput:
    """Partially update a subcategory. Changing category_id moves it."""
    return SubcategoryService(db).update(
        subcategory_id, body.model_dump(exclude_unset=True), actor_id=user.id
    )


@router.delete("/{subcategory_id}", response_model=SubcategoryOutput)
def delete_subcategory(
    subcategory_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> SubcategoryOutput:
    """Soft delete a subcategory no live dish uses."""
    return SubcategoryService(db).delete(subcategory_id, actor_id=user.id)


@router.patch("/{subcategory_id}/restore", response_model=SubcategoryOutput)
def restore_subcategory(
    subcategory_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> SubcategoryOutput:
    """Restore a subcategory. Its category must be live."""
    return SubcategoryService(db).restore(subcategory_id, actor_id=user.id)
