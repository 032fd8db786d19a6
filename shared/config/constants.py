"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, Limits

    if user.role == Roles.ADMIN:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants. The backoffice has a single role."""

    ADMIN: Final[str] = "admin"

    ALL: Final[list[str]] = [ADMIN]


# =============================================================================
# Pagination and field limits
# =============================================================================


class Limits:
    """Pagination defaults and field length limits."""

    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100

    NAME_MAX_LENGTH: Final[int] = 120
    DESCRIPTION_MAX_LENGTH: Final[int] = 2000
    MESSAGE_MAX_LENGTH: Final[int] = 5000
    USERNAME_MIN_LENGTH: Final[int] = 3
    USERNAME_MAX_LENGTH: Final[int] = 50
    PASSWORD_MIN_LENGTH: Final[int] = 6


# =============================================================================
# Audit trail
# =============================================================================

# Columns holding the id of the user behind each lifecycle transition.
# Output schemas expand each `<name>_id` into a `<name>` actor reference.
AUDIT_ACTOR_FIELDS: Final[tuple[str, ...]] = (
    "created_by",
    "updated_by",
    "deleted_by",
    "restored_by",
    "read_by",
)

# Image extensions accepted by the upload adapter
ALLOWED_IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpg", ".jpeg", ".png", ".webp", ".gif"}
)
