"""
List query dependencies.

Query strings are parsed once here into the typed query objects from
shared.utils.admin_schemas; services never see raw strings.

Usage:
    from bodegon_api.routers._common.pagination import get_dish_query

    @router.get("", response_model=Page[DishOutput])
    def list_dishes(query: DishListQuery = Depends(get_dish_query), ...):
        return DishService(db).list(query)
"""

from fastapi import Depends, Query

from shared.config.constants import Limits
from shared.utils.admin_schemas import (
    CategoryListQuery,
    ContactListQuery,
    DishListQuery,
    ListQuery,
    SubcategoryListQuery,
)


def get_list_query(
    page: int = Query(Limits.DEFAULT_PAGE, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE, description="Items per page"
    ),
    search: str | None = Query(None, description="Case-insensitive substring search"),
    include_deleted: bool = Query(False, description="Include soft-deleted records"),
) -> ListQuery:
    """Dependency for the options shared by every list endpoint."""
    return ListQuery(page=page, limit=limit, search=search, include_deleted=include_deleted)


def get_category_query(
    base: ListQuery = Depends(get_list_query),
    include_subcategories: bool = Query(False),
) -> CategoryListQuery:
    return CategoryListQuery(**base.model_dump(), include_subcategories=include_subcategories)


def get_subcategory_query(
    base: ListQuery = Depends(get_list_query),
    category_id: str | None = Query(None),
    include_category: bool = Query(False),
) -> SubcategoryListQuery:
    return SubcategoryListQuery(
        **base.model_dump(), category_id=category_id, include_category=include_category
    )


def get_dish_query(
    base: ListQuery = Depends(get_list_query),
    category_id: str | None = Query(None),
    subcategory_id: str | None = Query(None),
    include_relations: bool = Query(False),
) -> DishListQuery:
    return DishListQuery(
        **base.model_dump(),
        category_id=category_id,
        subcategory_id=subcategory_id,
        include_relations=include_relations,
    )


def get_contact_query(
    base: ListQuery = Depends(get_list_query),
    is_read: bool | None = Query(None),
) -> ContactListQuery:
    return ContactListQuery(**base.model_dump(), is_read=is_read)
