"""ORM Models — SQLAlchemy declarative models for the four tenant entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Company is the tenant root; every other entity references it by company_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from estate_ops.models.company import Company  # noqa: F401
from estate_ops.models.user import User  # noqa: F401
from estate_ops.models.employee_profile import EmployeeProfile  # noqa: F401
from estate_ops.models.project import Project  # noqa: F401
