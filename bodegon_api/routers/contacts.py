"""
Contact endpoints.

POST is public (rate limited). Everything else requires ADMIN role.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import require_admin
from bodegon_api.routers._common.pagination import get_contact_query
from bodegon_api.services.domain import ContactService
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.admin_schemas import ContactCreate, ContactListQuery, ContactOutput, ContactPage


router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.post("", response_model=ContactOutput, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.contact_rate_limit)
def create_contact(
    request: Request,
    body: ContactCreate,
    db: Session = Depends(get_db),
) -> ContactOutput:
    """Public contact form submission."""
    return ContactService(db).create(body.model_dump())


@router.get("", response_model=ContactPage)
def list_contacts(
    query: ContactListQuery = Depends(get_contact_query),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> ContactPage:
    """List contacts. The page also reports how many live contacts are unread."""
    return ContactService(db).list(query)


@router.get("/{contact_id}", response_model=ContactOutput)
def get_contact(
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> ContactOutput:
    return ContactService(db).get(contact_id)


@router.patch("/{contact_id}/mark-as-read", response_model=ContactOutput)
def mark_contact_as_read(
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> ContactOutput:
    return ContactService(db).mark_as_read(contact_id, actor_id=user.id)


@router.delete("/{contact_id}", response_model=ContactOutput)
def delete_contact(
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> ContactOutput:
    return ContactService(db).delete(contact_id, actor_id=user.id)


@router.patch("/{contact_id}/restore", response_model=ContactOutput)
def restore_contact(
    contact_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
) -> ContactOutput:
    return ContactService(db).restore(contact_id, actor_id=user.id)
