"""
Allergen management endpoints. Requires ADMIN role.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_list_query
from bodegon_api.services.domain import AllergenService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import AllergenCreate, AllergenOutput, AllergenUpdate, ListQuery
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/allergens", tags=["allergens"])


@router.get("", response_model=Page[AllergenOutput])
def list_allergens(
    query: ListQuery = Depends(get_list_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> Page[AllergenOutput]:
    return AllergenService(db).list(query)


@router.get("/{allergen_id}", response_model=AllergenOutput)
def get_allergen(
    allergen_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> AllergenOutput:
    return AllergenService(db).get(allergen_id)


@router.post("", response_model=AllergenOutput, status_code=status.HTTP_201_CREATED)
def create_allergen(
    body: AllergenCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> AllergenOutput:
    return AllergenService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{allergen_id}", response_model=AllergenOutput)
def update_allergen(
    allergen_id: str,
    body: AllergenUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> AllergenOutput:
    return AllergenService(db).update(
        allergen_id, body.model_dump(exclude_unset=True), actor_id=user.id
    )


@router.delete("/{allergen_id}", response_model=AllergenOutput)
def delete_allergen(
    allergen_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> AllergenOutput:
    """Soft delete an allergen. Dishes keep their link to it."""
    return AllergenService(db).delete(allergen_id, actor_id=user.id)


@router.patch("/{allergen_id}/restore", response_model=AllergenOutput)
def restore_allergen(
    allergen_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> AllergenOutput:
    return AllergenService(db).restore(allergen_id, actor_id=user.id)
