"""
Input validation helpers shared by services and routers.
"""

import uuid
from collections.abc import Iterable

from shared.utils.exceptions import InvalidIdError


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


def validate_id(value: str | None, entity: str) -> str:
    """
    Check that an identifier is a well-formed UUID and return its canonical form.

    Raises:
        InvalidIdError: If the value is not a UUID.
    """
    if not value:
        raise InvalidIdError(entity, value)
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdError(entity, value)


def validate_ids(values: Iterable[str], entity: str) -> list[str]:
    """Validate a list of identifiers, dropping duplicates but keeping order."""
    seen: dict[str, None] = {}
    for value in values:
        seen[validate_id(value, entity)] = None
    return list(seen)
