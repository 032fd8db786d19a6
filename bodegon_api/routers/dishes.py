"""
Dish management endpoints. Requires ADMIN role.
"""

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_dish_query
from bodegon_api.services.crud.soft_delete import ensure_live
from bodegon_api.services.domain import DishService
from bodegon_api.services.upload import UploadService, get_upload_service
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import DishCreate, DishListQuery, DishOutput, DishUpdate
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/dishes", tags=["dishes"])


@router.get("", response_model=Page[DishOutput])
def list_dishes(
    query: DishListQuery = Depends(get_dish_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> Page[DishOutput]:
    """List dishes. include_relations expands category, subcategory, ingredients and allergens."""
    return DishService(db).list(query)


@router.get("/{dish_id}", response_model=DishOutput)
def get_dish(
    dish_id: str,
    include_relations: bool = Query(False),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DishOutput:
    return DishService(db).get(dish_id, expand=include_relations)


@router.post("", response_model=DishOutput, status_code=status.HTTP_201_CREATED)
def create_dish(
    body: DishCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DishOutput:
    """Create a dish. Image defaults to the placeholder."""
    return DishService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{dish_id}", response_model=DishOutput)
def update_dish(
    dish_id: str,
    body: DishUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DishOutput:
    """Partially update a dish. `subcategory_id: null` clears the subcategory."""
    return DishService(db).update(dish_id, body.model_dump(exclude_unset=True), actor_id=user.id)


@router.post("/{dish_id}/image", response_model=DishOutput)
def upload_dish_image(
    dish_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    uploader: UploadService = Depends(get_upload_service),
    user: User = Depends(require_admin),
) -> DishOutput:
    """Upload an image and point the dish at it."""
    service = DishService(db)
    # Fail before storing anything if the dish is missing or deleted
    ensure_live(service.get_entity(dish_id), service.entity_name)
    url = uploader.upload(file.file.read(), file.filename or "", folder="dishes")
    return service.set_image(dish_id, url, actor_id=user.id)


@router.delete("/{dish_id}", response_model=DishOutput)
def delete_dish(
    dish_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DishOutput:
    return DishService(db).delete(dish_id, actor_id=user.id)


@router.patch("/{dish_id}/restore", response_model=DishOutput)
def restore_dish(
    dish_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> DishOutput:
    """Restore a dish. Its category (and subcategory, if any) must be live."""
    return DishService(db).restore(dish_id, actor_id=user.id)
