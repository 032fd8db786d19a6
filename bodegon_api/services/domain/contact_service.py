"""
Contact Service.

Contacts are created from the public site without an actor. Admins read,
mark as read, delete and restore them.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from bodegon_api.models import Contact
from bodegon_api.services.base_service import BaseCRUDService
from bodegon_api.services.crud.query import page_metadata, paginate
from bodegon_api.services.crud.soft_delete import ensure_live
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import ContactListQuery, ContactOutput, ContactPage, ListQuery
from shared.utils.exceptions import AlreadyReadError

logger = get_logger(__name__)


class ContactService(BaseCRUDService[Contact, ContactOutput]):
    """Service for contact messages."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Contact,
            output_schema=ContactOutput,
            entity_name="Contact",
            search_fields=(Contact.name, Contact.email, Contact.phone, Contact.message),
        )

    def create(self, data: dict[str, Any], actor_id: str | None = None) -> ContactOutput:
        """Store a public submission. No actor is recorded."""
        contact = Contact(**data)
        self._db.add(contact)
        safe_commit(self._db)
        logger.info("Contact received", contact_id=contact.id)
        return self.to_output(contact)

    def mark_as_read(self, contact_id: str, actor_id: str | None) -> ContactOutput:
        """
        Mark a contact as read.

        Raises:
            AlreadyDeletedError: If the contact is deleted (checked first).
            AlreadyReadError: If it was already read; read stamps stay unchanged.
        """
        contact = self.get_entity(contact_id)
        ensure_live(contact, self._entity_name)
        if contact.is_read:
            raise AlreadyReadError(contact.id)

        contact.mark_as_read(actor_id)
        safe_commit(self._db)
        logger.info("Contact marked as read", contact_id=contact.id, actor_id=actor_id)
        return self.to_output(contact)

    def count_unread(self) -> int:
        """Live contacts not yet read."""
        return self._repo.count(Contact.is_read.is_(False), is_deleted=False)

    def list(self, query: ListQuery) -> ContactPage:
        stmt = self._list_statement(query)
        items, total = paginate(self._db, stmt, query)
        return ContactPage(
            items=self.to_outputs(items),
            total_unread=self.count_unread(),
            **page_metadata(total, query),
        )

    def _apply_filters(self, stmt: Select, query: ListQuery) -> Select:
        if isinstance(query, ContactListQuery) and query.is_read is not None:
            stmt = stmt.where(Contact.is_read.is_(query.is_read))
        return stmt
