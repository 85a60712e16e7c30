"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (Alembic
autogenerate and test create_all rely on that).
"""

from worktrack.infrastructure.persistence.models.company import (
    Company,
    CompanyMember,
    Department,
    DepartmentMember,
)
from worktrack.infrastructure.persistence.models.mixins import (
    CompanyMixin,
    CuidMixin,
    MultiCompanyModel,
    TimestampMixin,
)
from worktrack.infrastructure.persistence.models.rbac import (
    Role,
    RolePermission,
    UserRole,
)
from worktrack.infrastructure.persistence.models.task import Task
from worktrack.infrastructure.persistence.models.task_collaboration import (
    TaskAttachment,
    TaskComment,
)
from worktrack.infrastructure.persistence.models.task_history import TaskHistory
from worktrack.infrastructure.persistence.models.task_time_log import TaskTimeLog
from worktrack.infrastructure.persistence.models.task_transfer import TaskTransfer

__all__ = [
    "Company",
    "CompanyMember",
    "Department",
    "DepartmentMember",
    "Role",
    "RolePermission",
    "UserRole",
    "Task",
    "TaskHistory",
    "TaskTimeLog",
    "TaskTransfer",
    "TaskComment",
    "TaskAttachment",
    "CuidMixin",
    "CompanyMixin",
    "TimestampMixin",
    "MultiCompanyModel",
]
