"""
Ingredient management endpoints. Requires ADMIN role.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_list_query
from bodegon_api.services.domain import IngredientService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import IngredientCreate, IngredientOutput, IngredientUpdate, ListQuery
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("", response_model=Page[IngredientOutput])
def list_ingredients(
    query: ListQuery = Depends(get_list_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> Page[IngredientOutput]:
    """List ingredients, newest first."""
    return IngredientService(db).list(query)


@router.get("/{ingredient_id}", response_model=IngredientOutput)
def get_ingredient(
    ingredient_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> IngredientOutput:
    return IngredientService(db).get(ingredient_id)


@router.post("", response_model=IngredientOutput, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    body: IngredientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> IngredientOutput:
    return IngredientService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{ingredient_id}", response_model=IngredientOutput)
def update_ingredient(
    ingredient_id: str,
    body: IngredientUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> IngredientOutput:
    return IngredientService(db).update(
        ingredient_id, body.model_dump(exclude_unset=True), actor_id=user.id
    )


@router.delete("/{ingredient_id}", response_model=IngredientOutput)
def delete_ingredient(
    ingredient_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> IngredientOutput:
    return IngredientService(db).delete(ingredient_id, actor_id=user.id)


@router.patch("/{ingredient_id}/restore", response_model=IngredientOutput)
def restore_ingredient(
    ingredient_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> IngredientOutput:
    return IngredientService(db).restore(ingredient_id, actor_id=user.id)
