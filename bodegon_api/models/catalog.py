"""
Catalog Models: Category, Subcategory, Dish and the dish association tables.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, ForeignKey, Index, Numeric, String, Table, Text, and_
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from .base import AuditMixin, Base

if TYPE_CHECKING:
    from .allergen import Allergen
    from .ingredient import Ingredient


# Dish <-> Ingredient / Allergen many-to-many.
# Soft deletes never remove rows, so the links survive a delete/restore cycle.
dish_ingredient = Table(
    "dish_ingredient",
    Base.metadata,
    Column("dish_id", String(36), ForeignKey("dish.id", ondelete="CASCADE"), primary_key=True),
    Column("ingredient_id", String(36), ForeignKey("ingredient.id"), primary_key=True, index=True),
)

dish_allergen = Table(
    "dish_allergen",
    Base.metadata,
    Column("dish_id", String(36), ForeignKey("dish.id", ondelete="CASCADE"), primary_key=True),
    Column("allergen_id", String(36), ForeignKey("allergen.id"), primary_key=True, index=True),
)


class Category(AuditMixin, Base):
    """
    Top level of the menu taxonomy.
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.

    `subcategories` is derived from Subcategory.category_id (live rows only);
    there is no stored list to keep in sync.
    """

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    name_slug: Mapped[str] = mapped_column(String(140), nullable=False, index=True)

    subcategories: Mapped[list["Subcategory"]] = relationship(
        primaryjoin=lambda: and_(
            Category.id == foreign(Subcategory.category_id),
            Subcategory.is_deleted.is_(False),
        ),
        viewonly=True,
        order_by=lambda: Subcategory.created_at.desc(),
    )

    __table_args__ = (
        Index("ix_category_name_live", "name", "is_deleted"),
    )


class Subcategory(AuditMixin, Base):
    """
    Second level of the taxonomy, scoped to one Category.
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.
    """

    __tablename__ = "subcategory"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    name_slug: Mapped[str] = mapped_column(String(140), nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("category.id"), nullable=False, index=True
    )

    category: Mapped["Category"] = relationship()

    __table_args__ = (
        Index("ix_subcategory_category_live", "category_id", "is_deleted"),
    )


class Dish(AuditMixin, Base):
    """
    A menu item.
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.
    """

    __tablename__ = "dish"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    name_slug: Mapped[str] = mapped_column(String(140), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("category.id"), nullable=False, index=True
    )
    subcategory_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("subcategory.id"), nullable=True, index=True
    )

    category: Mapped["Category"] = relationship()
    subcategory: Mapped[Optional["Subcategory"]] = relationship()
    ingredients: Mapped[list["Ingredient"]] = relationship(secondary=dish_ingredient)
    allergens: Mapped[list["Allergen"]] = relationship(secondary=dish_allergen)

    __table_args__ = (
        Index("ix_dish_category_live", "category_id", "is_deleted"),
    )
