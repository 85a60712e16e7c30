"""Domain enumerations for the task lifecycle.

Values are the lower-case strings stored in the database; they form the
storage contract with reporting and UI layers.
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or CHECK constraints)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class TaskStatus(_ValuesMixin, str, Enum):
    """Board column of a task. Any status may move to any other status."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(_ValuesMixin, str, Enum):
    """Fixed three-level priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskType(_ValuesMixin, str, Enum):
    """Scope of a task; set at creation and immutable."""

    PERSONAL = "personal"
    DEPARTMENT = "department"
    COMPANY = "company"

    @property
    def is_claimable_scope(self) -> bool:
        """True for scopes whose tasks may be offered publicly."""
        return self in (TaskType.DEPARTMENT, TaskType.COMPANY)


class HistoryAction(_ValuesMixin, str, Enum):
    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    PRIORITY_CHANGED = "priority_changed"
    TITLE_CHANGED = "title_changed"
    TIMER_STARTED = "timer_started"
    TIMER_STOPPED = "timer_stopped"
    COMMENT_ADDED = "comment_added"
    ATTACHMENT_ADDED = "attachment_added"


class TransferType(_ValuesMixin, str, Enum):
    """Delegation keeps the assignee of record; transfer reassigns ownership."""

    DELEGATION = "delegation"
    TRANSFER = "transfer"


class TransferStatus(_ValuesMixin, str, Enum):
    """Pending is the only non-terminal state."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TransferAction(_ValuesMixin, str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class MembershipScope(_ValuesMixin, str, Enum):
    """Scope type for the membership/eligibility oracle."""

    DEPARTMENT = "department"
    COMPANY = "company"


class Permission(_ValuesMixin, str, Enum):
    """Task permissions granted to roles (flat set membership)."""

    MANAGE_TASKS = "manage_tasks"
    VIEW_ALL_TASKS = "view_all_tasks"
    CREATE_PERSONAL_TASKS = "create_personal_tasks"
    CREATE_DEPARTMENT_TASKS = "create_department_tasks"
    CREATE_COMPANY_TASKS = "create_company_tasks"
    EDIT_TASKS = "edit_tasks"
    DELETE_TASKS = "delete_tasks"
    ASSIGN_TASKS = "assign_tasks"
    ACCEPT_PUBLIC_TASKS = "accept_public_tasks"

    @classmethod
    def for_task_creation(cls, task_type: TaskType) -> "Permission":
        """Permission required to create a task of the given type."""
        return {
            TaskType.PERSONAL: cls.CREATE_PERSONAL_TASKS,
            TaskType.DEPARTMENT: cls.CREATE_DEPARTMENT_TASKS,
            TaskType.COMPANY: cls.CREATE_COMPANY_TASKS,
        }[task_type]
