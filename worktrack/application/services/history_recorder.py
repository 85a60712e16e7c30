"""History recorder: the only writer of task history rows.

Each mutating operation calls append() explicitly inside its own
transaction, so the set of recorded actions is visible at the call sites.
"""

from __future__ import annotations

from datetime import datetime

from worktrack.application.dtos.history import TaskHistoryResult
from worktrack.application.interfaces.repositories import ITaskHistoryRepository
from worktrack.domain.enums import HistoryAction


class HistoryRecorder:
    def __init__(self, history_repo: ITaskHistoryRepository) -> None:
        self.history_repo = history_repo

    async def append(
        self,
        task_id: str,
        action: HistoryAction,
        changed_by: str,
        changed_at: datetime,
        old_value: str | None = None,
        new_value: str | None = None,
        field_changed: str | None = None,
    ) -> TaskHistoryResult:
        return await self.history_repo.append(
            task_id,
            action.value,
            changed_by,
            changed_at,
            field_changed=field_changed,
            old_value=old_value,
            new_value=new_value,
        )

    async def list_history(self, task_id: str) -> list[TaskHistoryResult]:
        """Entries in chronological order."""
        return await self.history_repo.list_for_task(task_id)
