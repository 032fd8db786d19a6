"""
Pydantic schemas for the backoffice API.
Centralized to avoid circular imports between services and routers.

Three families per entity kind:
- *Create / *Update: request bodies, validated at the boundary.
  Update bodies are partial; services apply `model_dump(exclude_unset=True)`.
- *Output: response bodies. Audit actors are expanded to ActorRef.
- *ListQuery: typed list options, parsed once from the query string.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shared.config.constants import Limits
from shared.utils.schemas import Page, Role


class _Input(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# =============================================================================
# References (expanded relations)
# =============================================================================


class ActorRef(BaseModel):
    """The user behind an audit stamp."""

    id: str
    username: str
    first_name: str
    last_name: str


class NamedRef(BaseModel):
    id: str
    name: str


class SlugRef(NamedRef):
    name_slug: str


# =============================================================================
# List queries
# =============================================================================


class ListQuery(BaseModel):
    """Options shared by every list endpoint."""

    page: int = Field(Limits.DEFAULT_PAGE, ge=1)
    limit: int = Field(Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE)
    search: Optional[str] = None
    include_deleted: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class CategoryListQuery(ListQuery):
    include_subcategories: bool = False


class SubcategoryListQuery(ListQuery):
    category_id: Optional[str] = None
    include_category: bool = False


class DishListQuery(ListQuery):
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    include_relations: bool = False


class ContactListQuery(ListQuery):
    is_read: Optional[bool] = None


# =============================================================================
# Audit base
# =============================================================================


class AuditOutput(BaseModel):
    id: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    restored_at: datetime | None = None
    created_by: ActorRef | None = None
    updated_by: ActorRef | None = None
    deleted_by: ActorRef | None = None
    restored_by: ActorRef | None = None


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryOutput(AuditOutput):
    name: str
    name_slug: str
    subcategory_ids: list[str] = []
    # Only when include_subcategories is set
    subcategories: list[SlugRef] | None = None


class CategoryCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)


class CategoryUpdate(_Input):
    name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)


# =============================================================================
# Subcategory Schemas
# =============================================================================


class SubcategoryOutput(AuditOutput):
    name: str
    name_slug: str
    category_id: str
    # Only when include_category is set
    category: SlugRef | None = None


class SubcategoryCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    category_id: str


class SubcategoryUpdate(_Input):
    name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    category_id: str | None = None


# =============================================================================
# Dish Schemas
# =============================================================================


class DishOutput(AuditOutput):
    name: str
    name_slug: str
    description: str
    price: float
    image: str
    category_id: str
    subcategory_id: str | None = None
    ingredient_ids: list[str] = []
    allergen_ids: list[str] = []
    # Only when include_relations is set
    category: SlugRef | None = None
    subcategory: SlugRef | None = None
    ingredients: list[NamedRef] | None = None
    allergens: list[NamedRef] | None = None


class DishCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    name_slug: str | None = None
    description: str = Field("", max_length=Limits.DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image: str | None = None
    category_id: str
    subcategory_id: str | None = None
    ingredient_ids: list[str] = []
    allergen_ids: list[str] = []


class DishUpdate(_Input):
    name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    name_slug: str | None = None
    description: str | None = Field(None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    image: str | None = None
    category_id: str | None = None
    # An explicit null clears the subcategory
    subcategory_id: str | None = None
    ingredient_ids: list[str] | None = None
    allergen_ids: list[str] | None = None


# =============================================================================
# Ingredient / Allergen Schemas
# =============================================================================


class IngredientOutput(AuditOutput):
    name: str


class IngredientCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)


class IngredientUpdate(_Input):
    name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)


class AllergenOutput(AuditOutput):
    name: str


class AllergenCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)


class AllergenUpdate(_Input):
    name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)


# =============================================================================
# User Schemas
# =============================================================================


class UserOutput(AuditOutput):
    username: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: Role


class UserCreate(_Input):
    username: str = Field(
        min_length=Limits.USERNAME_MIN_LENGTH, max_length=Limits.USERNAME_MAX_LENGTH
    )
    password: str = Field(min_length=Limits.PASSWORD_MIN_LENGTH)
    first_name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    phone: str | None = None
    role: Role = "admin"


class UserUpdate(_Input):
    username: str | None = Field(
        None, min_length=Limits.USERNAME_MIN_LENGTH, max_length=Limits.USERNAME_MAX_LENGTH
    )
    password: str | None = Field(None, min_length=Limits.PASSWORD_MIN_LENGTH)
    first_name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    last_name: str | None = Field(None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    phone: str | None = None
    role: Role | None = None


# =============================================================================
# Contact Schemas
# =============================================================================


class ContactOutput(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    message: str
    is_read: bool
    read_at: datetime | None = None
    read_by: ActorRef | None = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    deleted_by: ActorRef | None = None
    restored_at: datetime | None = None
    restored_by: ActorRef | None = None


class ContactCreate(_Input):
    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)
    message: str = Field(min_length=1, max_length=Limits.MESSAGE_MAX_LENGTH)


class ContactPage(Page[ContactOutput]):
    """Contact list page, plus the number of live unread contacts."""

    total_unread: int


# =============================================================================
# Dashboard Schemas
# =============================================================================


class EntityStats(BaseModel):
    total: int
    active: int
    deleted: int


class ContactStats(EntityStats):
    unread: int
    read: int


class DashboardStats(BaseModel):
    categories: EntityStats
    subcategories: EntityStats
    dishes: EntityStats
    ingredients: EntityStats
    allergens: EntityStats
    users: EntityStats
    contacts: ContactStats
