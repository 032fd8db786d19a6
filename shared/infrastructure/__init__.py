"""
Infrastructure module: database handle and request correlation.
"""

from shared.infrastructure.db import Database, get_db, safe_commit

__all__ = ["Database", "get_db", "safe_commit"]
