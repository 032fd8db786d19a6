"""
Ingredient model.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base


class Ingredient(AuditMixin, Base):
    """
    Reference data attached to dishes.
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.
    """

    __tablename__ = "ingredient"

    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
