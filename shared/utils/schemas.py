"""
Shared Pydantic schemas used across the application.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["admin"]


class Page(BaseModel, Generic[T]):
    """
    One page of a list query.

    total_pages is 0 when nothing matches; the has_* flags are plain
    page-index comparisons.
    """

    items: list[T]
    total_items: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserInfo(BaseModel):
    """Basic user information included in auth responses."""

    id: str
    username: str
    first_name: str
    last_name: str
    role: Role


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo

