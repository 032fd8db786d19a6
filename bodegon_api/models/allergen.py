"""
Allergen model.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base


class Allergen(AuditMixin, Base):
    """
    Allergen declared on dishes (gluten, lactose, ...).
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.
    """

    __tablename__ = "allergen"

    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
