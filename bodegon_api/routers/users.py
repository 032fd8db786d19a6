"""
Backoffice user management endpoints. Requires ADMIN role.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_list_query
from bodegon_api.services.domain import UserService
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import ListQuery, UserCreate, UserOutput, UserUpdate
from shared.utils.schemas import Page


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=Page[UserOutput])
def list_users(
    query: ListQuery = Depends(get_list_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> Page[UserOutput]:
    """List users. Search matches username, first and last name."""
    return UserService(db).list(query)


@router.get("/{user_id}", response_model=UserOutput)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> UserOutput:
    return UserService(db).get(user_id)


@router.post("", response_model=UserOutput, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> UserOutput:
    """Create a user. The password is stored hashed."""
    return UserService(db).create(body.model_dump(), actor_id=user.id)


@router.put("/{user_id}", response_model=UserOutput)
def update_user(
    user_id: str,
    body: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> UserOutput:
    return UserService(db).update(user_id, body.model_dump(exclude_unset=True), actor_id=user.id)


@router.delete("/{user_id}", response_model=UserOutput)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> UserOutput:
    """Soft delete a user. Their tokens stop resolving immediately."""
    return UserService(db).delete(user_id, actor_id=user.id)


@router.patch("/{user_id}/restore", response_model=UserOutput)
def restore_user(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> UserOutput:
    return UserService(db).restore(user_id, actor_id=user.id)
