"""
App wiring: lifespan and middleware configuration.
"""

from .cors import configure_cors
from .lifespan import make_lifespan

__all__ = ["configure_cors", "make_lifespan"]
