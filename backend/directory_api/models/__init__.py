"""ORM Models — SQLAlchemy declarative models for the directory.

Invariants:
    - All models inherit from Base (db/base.py)
    - Enterprise is the aggregate root; private fields and logo hang off it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from directory_api.models.enterprise import Enterprise  # noqa: F401
from directory_api.models.enterprise_private import EnterprisePrivateFields  # noqa: F401
from directory_api.models.enterprise_logo import EnterpriseLogo  # noqa: F401
