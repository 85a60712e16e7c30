"""DTOs for task history (append-only audit entries)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskHistoryResult:
    """One recorded change on a task."""

    id: int
    task_id: str
    action: str
    field_changed: str | None
    old_value: str | None
    new_value: str | None
    changed_by: str
    changed_at: datetime
