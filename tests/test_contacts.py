"""
Tests for the contact lifecycle: public creation, read state, delete/restore.
"""

import pytest

from shared.utils.admin_schemas import ContactListQuery
from shared.utils.exceptions import AlreadyDeletedError, AlreadyReadError


@pytest.fixture
def make_contact(contacts):
    def _make(name="Luis", message="Do you take reservations?"):
        return contacts.create(
            {"name": name, "email": "luis@example.com", "phone": "555-0101", "message": message}
        )

    return _make


class TestContactService:
    """Tests for ContactService."""

    def test_create_without_actor(self, make_contact):
        """Public submissions are unread and carry no actor."""
        contact = make_contact()

        assert contact.is_read is False
        assert contact.read_at is None
        assert contact.read_by is None
        assert contact.is_deleted is False

    def test_mark_as_read(self, contacts, make_contact, actor_id):
        contact = make_contact()

        read = contacts.mark_as_read(contact.id, actor_id)

        assert read.is_read is True
        assert read.read_at is not None
        assert read.read_by.id == actor_id

    def test_mark_as_read_twice(self, contacts, users, make_contact, actor_id, db_session):
        """The second call fails and the first read stamps stay."""
        other = users.create(
            {"username": "second", "password": "secret123", "first_name": "B", "last_name": "C"},
            actor_id,
        )
        contact = make_contact()
        first = contacts.mark_as_read(contact.id, actor_id)

        with pytest.raises(AlreadyReadError) as exc_info:
            contacts.mark_as_read(contact.id, other.id)
        assert exc_info.value.code == "already_read"

        db_session.expire_all()
        current = contacts.get(contact.id)
        assert current.read_by.id == actor_id
        assert current.read_at == first.read_at

    def test_mark_deleted_as_read(self, contacts, make_contact, actor_id):
        """Deletion is checked before the read state."""
        contact = make_contact()
        contacts.mark_as_read(contact.id, actor_id)
        contacts.delete(contact.id, actor_id)

        with pytest.raises(AlreadyDeletedError):
            contacts.mark_as_read(contact.id, actor_id)

    def test_list_reports_unread(self, contacts, make_contact, actor_id):
        """total_unread counts live unread contacts regardless of the page filter."""
        first = make_contact("Ana")
        make_contact("Beto")
        deleted = make_contact("Carla")
        contacts.mark_as_read(first.id, actor_id)
        contacts.delete(deleted.id, actor_id)

        page = contacts.list(ContactListQuery(is_read=True))

        assert [c.id for c in page.items] == [first.id]
        assert page.total_unread == 1

    def test_search_email(self, contacts, make_contact):
        make_contact()

        assert contacts.list(ContactListQuery(search="EXAMPLE.COM")).total_items == 1
