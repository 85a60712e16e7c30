"""Task history API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TaskHistoryResponse(BaseModel):
    """One history entry (append-only, chronological)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: str
    action: str
    field_changed: str | None
    old_value: str | None
    new_value: str | None
    changed_by: str
    changed_at: datetime
