"""
Centralized domain exceptions for consistent error handling.

Every error is an HTTPException subclass, so it propagates unmodified from the
services to the HTTP layer, which renders `detail` and `code`.

Usage:
    from shared.utils.exceptions import NotFoundError, AlreadyDeletedError

    raise NotFoundError("Dish", dish_id)
    raise AlreadyDeletedError("Category", category_id)
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class to ensure consistent
    logging and response format.
    """

    code: str = "error"

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, code=self.code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Dish", dish_id)
    """

    code = "not_found"

    def __init__(self, entity: str, entity_id: str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with id {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Slug may only contain a-z, 0-9 and _", field="name_slug")
    """

    code = "validation_error"

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            **log_context,
        )


class InvalidIdError(ValidationError):
    """Supplied id is not a well-formed identifier."""

    code = "invalid_id"

    def __init__(self, entity: str, entity_id: Any, **log_context: Any):
        super().__init__(
            f"Invalid {entity} id: {entity_id!r}",
            entity=entity,
            entity_id=str(entity_id),
            **log_context,
        )


class InvalidReferenceError(ValidationError):
    """A referenced entity does not exist or is deleted."""

    code = "invalid_reference"

    def __init__(self, entity: str, entity_id: str, field: str | None = None, **log_context: Any):
        super().__init__(
            f"Referenced {entity} {entity_id} does not exist or is deleted",
            entity=entity,
            entity_id=entity_id,
            field=field,
            **log_context,
        )
        self.entity = entity
        self.entity_id = entity_id


class SubcategoryMismatchError(ValidationError):
    """The subcategory does not belong to the given category."""

    code = "subcategory_mismatch"

    def __init__(self, subcategory_id: str, category_id: str, **log_context: Any):
        super().__init__(
            f"Subcategory {subcategory_id} does not belong to category {category_id}",
            subcategory_id=subcategory_id,
            category_id=category_id,
            **log_context,
        )


# =============================================================================
# 401 / 403 Authentication and authorization
# =============================================================================


class InvalidTokenError(AppException):
    """Actor resolution failed: token missing, malformed or user gone."""

    code = "invalid_token"

    def __init__(self, reason: str = "Invalid token", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=reason,
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ExpiredTokenError(InvalidTokenError):
    """Token signature is valid but it has expired."""

    code = "expired_token"

    def __init__(self, **log_context: Any):
        super().__init__("Token has expired", **log_context)


class InvalidCredentialsError(AppException):
    """Login failed. The message never says which half was wrong."""

    code = "invalid_credentials"

    def __init__(self, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("manage dishes")
    """

    code = "forbidden"

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not allowed to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            action=action,
            **log_context,
        )


# =============================================================================
# 409 Conflict: uniqueness, lifecycle and dependents
# =============================================================================


class ConflictError(AppException):
    """Resource conflict error (409)."""

    code = "conflict"

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            **log_context,
        )


class DuplicateNameError(ConflictError):
    """Another live record in the same scope already uses this name."""

    code = "duplicate_name"

    def __init__(self, entity: str, name: str, field: str = "name", **log_context: Any):
        super().__init__(
            f"A {entity} with {field} '{name}' already exists",
            entity=entity,
            name=name,
            field=field,
            **log_context,
        )


class UsernameTakenError(ConflictError):
    """Another live user already has this username."""

    code = "username_taken"

    def __init__(self, username: str, **log_context: Any):
        super().__init__(f"Username '{username}' is already taken", username=username, **log_context)


class AlreadyDeletedError(ConflictError):
    """Delete (or another mutation) on an entity that is already deleted."""

    code = "already_deleted"

    def __init__(self, entity: str, entity_id: str, **log_context: Any):
        super().__init__(
            f"{entity} {entity_id} is already deleted",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class NotDeletedError(ConflictError):
    """Restore on an entity that is not deleted."""

    code = "not_deleted"

    def __init__(self, entity: str, entity_id: str, **log_context: Any):
        super().__init__(
            f"{entity} {entity_id} is not deleted",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class AlreadyReadError(ConflictError):
    """Contact is already marked as read."""

    code = "already_read"

    def __init__(self, contact_id: str, **log_context: Any):
        super().__init__(
            f"Contact {contact_id} is already marked as read",
            contact_id=contact_id,
            **log_context,
        )


class HasSubcategoriesError(ConflictError):
    """Category delete blocked by live subcategories."""

    code = "has_subcategories"

    def __init__(self, category_id: str, count: int, **log_context: Any):
        super().__init__(
            f"Category {category_id} has {count} live subcategories. Delete or reassign them first.",
            category_id=category_id,
            count=count,
            **log_context,
        )


class HasDishesError(ConflictError):
    """Category/subcategory delete blocked by dishes referencing it."""

    code = "has_dishes"

    def __init__(self, entity: str, entity_id: str, count: int, **log_context: Any):
        super().__init__(
            f"{entity} {entity_id} is used by {count} dishes",
            entity=entity,
            entity_id=entity_id,
            count=count,
            **log_context,
        )


# =============================================================================
# 5xx External services
# =============================================================================


class UploadError(AppException):
    """The upload adapter could not store the file."""

    code = "upload_failed"

    def __init__(self, reason: str, status_code: int = status.HTTP_502_BAD_GATEWAY, **log_context: Any):
        super().__init__(
            status_code=status_code,
            detail=f"Image upload failed: {reason}",
            log_level="error" if status_code >= 500 else "warning",
            **log_context,
        )
