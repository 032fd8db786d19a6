"""
Tests for CategoryService and SubcategoryService.

Tests cover:
- Name and slug uniqueness among live records
- Delete blocked by live subcategories and dishes
- The derived subcategory list of a category
- Subcategory parent checks, reassignment and restore
"""

import pytest

from shared.utils.admin_schemas import CategoryListQuery, SubcategoryListQuery
from shared.utils.exceptions import (
    DuplicateNameError,
    HasDishesError,
    HasSubcategoriesError,
    InvalidIdError,
    InvalidReferenceError,
    ValidationError,
)

MISSING_ID = "11111111-1111-1111-1111-111111111111"


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_derives_slug(self, categories, actor_id):
        """name_slug is derived from the name."""
        category = categories.create({"name": "Platos Principales"}, actor_id)

        assert category.name_slug == "platos_principales"
        assert category.subcategory_ids == []

    def test_duplicate_name_fails(self, categories, starters, actor_id):
        """Two live categories cannot share a name."""
        with pytest.raises(DuplicateNameError) as exc_info:
            categories.create({"name": "Starters"}, actor_id)
        assert exc_info.value.code == "duplicate_name"

    def test_duplicate_slug_fails(self, categories, starters, actor_id):
        """Names that slug the same collide too."""
        with pytest.raises(DuplicateNameError):
            categories.create({"name": "starters!"}, actor_id)

    def test_name_of_deleted_category_is_free(self, categories, starters, actor_id):
        """A deleted category does not hold on to its name."""
        categories.delete(starters.id, actor_id)

        again = categories.create({"name": "Starters"}, actor_id)

        assert again.id != starters.id
        assert again.is_deleted is False

    def test_restore_fails_when_name_taken(self, categories, starters, actor_id):
        """Restoring would create a live duplicate."""
        categories.delete(starters.id, actor_id)
        categories.create({"name": "Starters"}, actor_id)

        with pytest.raises(DuplicateNameError):
            categories.restore(starters.id, actor_id)

    def test_update_to_own_name_is_allowed(self, categories, starters, actor_id):
        """The record itself is excluded from the duplicate search."""
        updated = categories.update(starters.id, {"name": "Starters"}, actor_id)

        assert updated.name == "Starters"

    def test_rename_rederives_slug(self, categories, starters, actor_id):
        updated = categories.update(starters.id, {"name": "Entradas Frías"}, actor_id)

        assert updated.name_slug == "entradas_frias"

    def test_name_without_letters_fails(self, categories, actor_id):
        with pytest.raises(ValidationError):
            categories.create({"name": "!!!"}, actor_id)

    def test_delete_with_subcategories_fails(self, categories, starters, soups, actor_id):
        """A category with live subcategories cannot be deleted."""
        with pytest.raises(HasSubcategoriesError) as exc_info:
            categories.delete(starters.id, actor_id)
        assert exc_info.value.code == "has_subcategories"

    def test_delete_after_subcategories_removed(
        self, categories, subcategories, starters, soups, actor_id
    ):
        """Once its subcategories are deleted the category can go."""
        subcategories.delete(soups.id, actor_id)

        deleted = categories.delete(starters.id, actor_id)

        assert deleted.is_deleted is True

    def test_delete_after_subcategory_reassigned(
        self, categories, subcategories, starters, mains, soups, actor_id
    ):
        """Moving the subcategory elsewhere also unblocks the delete."""
        subcategories.update(soups.id, {"category_id": mains.id}, actor_id)

        assert categories.delete(starters.id, actor_id).is_deleted is True

    def test_delete_with_dishes_fails(self, categories, starters, make_dish, actor_id):
        """Dishes referencing the category block the delete."""
        make_dish()

        with pytest.raises(HasDishesError):
            categories.delete(starters.id, actor_id)

    def test_deleted_dishes_do_not_block(
        self, categories, dishes, starters, make_dish, actor_id
    ):
        dish = make_dish()
        dishes.delete(dish.id, actor_id)

        assert categories.delete(starters.id, actor_id).is_deleted is True

    def test_invalid_id(self, categories):
        with pytest.raises(InvalidIdError):
            categories.get("not-a-uuid")


class TestDerivedSubcategoryList:
    """Category.subcategory_ids follows the live subcategories."""

    def test_create_adds_subcategory(self, categories, starters, soups):
        assert categories.get(starters.id).subcategory_ids == [soups.id]

    def test_delete_and_restore(self, categories, subcategories, starters, soups, actor_id):
        """Delete removes the id, restore brings it back exactly once."""
        subcategories.delete(soups.id, actor_id)
        assert categories.get(starters.id).subcategory_ids == []

        subcategories.restore(soups.id, actor_id)
        assert categories.get(starters.id).subcategory_ids == [soups.id]

    def test_reassignment_moves_id(
        self, categories, subcategories, starters, mains, soups, actor_id
    ):
        subcategories.update(soups.id, {"category_id": mains.id}, actor_id)

        assert categories.get(starters.id).subcategory_ids == []
        assert categories.get(mains.id).subcategory_ids == [soups.id]

    def test_expanded_list(self, categories, starters, soups):
        """include_subcategories expands the references."""
        page = categories.list(CategoryListQuery(include_subcategories=True))

        [category] = page.items
        assert category.subcategories[0].name == "Soups"
        assert category.subcategories[0].name_slug == "soups"

    def test_not_expanded_by_default(self, categories, starters, soups):
        [category] = categories.list(CategoryListQuery()).items

        assert category.subcategories is None
        assert category.subcategory_ids == [soups.id]


class TestSubcategoryService:
    """Tests for SubcategoryService."""

    def test_missing_category_fails(self, subcategories, actor_id):
        """The parent must exist."""
        with pytest.raises(InvalidReferenceError) as exc_info:
            subcategories.create({"name": "Soups", "category_id": MISSING_ID}, actor_id)
        assert exc_info.value.code == "invalid_reference"

    def test_deleted_category_fails(self, categories, subcategories, mains, actor_id):
        categories.delete(mains.id, actor_id)

        with pytest.raises(InvalidReferenceError):
            subcategories.create({"name": "Grill", "category_id": mains.id}, actor_id)

    def test_name_unique_per_category(self, subcategories, starters, soups, actor_id):
        with pytest.raises(DuplicateNameError):
            subcategories.create({"name": "Soups", "category_id": starters.id}, actor_id)

    def test_same_name_in_other_category(self, subcategories, mains, soups, actor_id):
        """Uniqueness is scoped to the parent category."""
        other = subcategories.create({"name": "Soups", "category_id": mains.id}, actor_id)

        assert other.category_id == mains.id

    def test_move_into_category_with_same_name_fails(
        self, subcategories, mains, soups, actor_id
    ):
        subcategories.create({"name": "Soups", "category_id": mains.id}, actor_id)

        with pytest.raises(DuplicateNameError):
            subcategories.update(soups.id, {"category_id": mains.id}, actor_id)

    def test_move_with_dishes_fails(self, subcategories, mains, soups, make_dish, actor_id):
        """Moving would leave its dishes pointing at a foreign subcategory."""
        make_dish(subcategory_id=soups.id)

        with pytest.raises(HasDishesError):
            subcategories.update(soups.id, {"category_id": mains.id}, actor_id)

    def test_delete_with_dishes_fails(self, subcategories, soups, make_dish, actor_id):
        make_dish(subcategory_id=soups.id)

        with pytest.raises(HasDishesError) as exc_info:
            subcategories.delete(soups.id, actor_id)
        assert exc_info.value.code == "has_dishes"

    def test_restore_requires_live_category(
        self, categories, subcategories, starters, soups, actor_id
    ):
        """A subcategory cannot come back under a deleted category."""
        subcategories.delete(soups.id, actor_id)
        categories.delete(starters.id, actor_id)

        with pytest.raises(InvalidReferenceError):
            subcategories.restore(soups.id, actor_id)

    def test_filter_by_category(self, subcategories, starters, mains, soups, actor_id):
        subcategories.create({"name": "Grill", "category_id": mains.id}, actor_id)

        page = subcategories.list(SubcategoryListQuery(category_id=starters.id))

        assert [s.id for s in page.items] == [soups.id]

    def test_include_category(self, subcategories, soups):
        [subcategory] = subcategories.list(SubcategoryListQuery(include_category=True)).items

        assert subcategory.category.name == "Starters"
