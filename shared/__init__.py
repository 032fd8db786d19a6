"""
Shared module for cross-cutting concerns of the Bodegón backend.

STRUCTURE:
- shared.security: Authentication and password handling
  - auth.py: JWT signing/verification, bearer token extraction
  - password.py: Bcrypt hashing
  - rate_limit.py: slowapi limiter for public endpoints

- shared.infrastructure: Database and request plumbing
  - db.py: Database handle, sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, limits, audit actor fields

- shared.utils: Utilities
  - exceptions.py: Domain errors as HTTP exceptions with auto-logging
  - validators.py: Identifier validation
  - slug.py: Slug generation

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.utils.exceptions import NotFoundError, AlreadyDeletedError
"""
