"""
Shared infrastructure for the POS API.

STRUCTURE:
- shared.security: Authentication primitives
  - auth.py: JWT signing/verification, bearer header parsing
  - password.py: Bcrypt hashing and password rules
  - rate_limit.py: Login rate limiting

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and log filter

- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging and security audit helpers
  - constants.py: Roles, caller classes, order statuses, messages

- shared.utils: Utilities
  - exceptions.py: Error taxonomy and classifier

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, UserTypes
    from shared.utils.exceptions import NotFoundError, classify
"""
