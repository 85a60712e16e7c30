"""Timer operations: start/stop time tracking on a task and list its runs."""

from __future__ import annotations

from worktrack.application.dtos.task import TaskResult
from worktrack.application.dtos.time_log import TimeLogResult, TimerStopResult
from worktrack.application.interfaces.repositories import (
    ITaskRepository,
    ITaskTimeLogRepository,
)
from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.domain.enums import HistoryAction, Permission
from worktrack.domain.exceptions import (
    ConflictException,
    InvalidStateException,
    ResourceNotFoundException,
)
from worktrack.domain.timekeeping import elapsed_minutes
from worktrack.shared.telemetry.logging import get_logger
from worktrack.shared.utils.datetime import Clock, utc_now

logger = get_logger(__name__)


class TimerService:
    """Starts and stops task timers.

    The task carries one running flag; each run is a time log owned by the
    user who started it. A second start while the flag is set is a conflict
    (first writer wins), never a silent restart.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        time_log_repo: ITaskTimeLogRepository,
        history: HistoryRecorder,
        permission_gate: PermissionGate,
        clock: Clock = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.time_log_repo = time_log_repo
        self.history = history
        self.permission_gate = permission_gate
        self.clock = clock

    async def _get_task(self, company_id: str, task_id: str) -> TaskResult:
        task = await self.task_repo.get_task(company_id, task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def start_timer(
        self, company_id: str, task_id: str, user_id: str
    ) -> TimeLogResult:
        """Set the task's running flag, open a time log, record `timer_started`.

        Raises ConflictException if the timer is already running, including
        when a concurrent start set the flag between our read and our write.
        """
        await self.permission_gate.require_permission(
            user_id, company_id, Permission.EDIT_TASKS
        )
        task = await self._get_task(company_id, task_id)
        if task.is_timer_running:
            raise ConflictException(
                "Timer is already running for this task", "task", task_id
            )

        now = self.clock()
        if not await self.task_repo.try_start_timer(company_id, task_id, now):
            logger.info("Timer start lost race: task=%s user=%s", task_id, user_id)
            raise ConflictException(
                "Timer is already running for this task", "task", task_id
            )
        time_log = await self.time_log_repo.create_open(task_id, user_id, now)
        await self.history.append(
            task_id,
            HistoryAction.TIMER_STARTED,
            user_id,
            now,
            new_value=now.isoformat(),
            field_changed="current_timer_start",
        )
        logger.info("Timer started: task=%s user=%s", task_id, user_id)
        return time_log

    async def stop_timer(
        self,
        company_id: str,
        task_id: str,
        user_id: str,
        description: str | None = None,
    ) -> TimerStopResult:
        """Close the user's open run and recompute the task total.

        Duration is whole minutes rounded half up. total_time_minutes is the
        sum over all closed runs of the task, read back from the database.
        """
        await self.permission_gate.require_permission(
            user_id, company_id, Permission.EDIT_TASKS
        )
        await self._get_task(company_id, task_id)
        open_log = await self.time_log_repo.get_latest_open(task_id, user_id)
        if open_log is None:
            raise InvalidStateException(
                "No running timer for this user on the task", state="stopped"
            )

        now = self.clock()
        duration = elapsed_minutes(open_log.started_at, now)
        note = description.strip() if description and description.strip() else None
        closed = await self.time_log_repo.close(open_log.id, now, duration, note)
        if closed is None:
            raise ConflictException(
                "Timer was already stopped", "time_log", open_log.id
            )

        total = await self.time_log_repo.sum_closed_minutes(task_id)
        await self.task_repo.finish_timer(company_id, task_id, total, now)
        await self.history.append(
            task_id,
            HistoryAction.TIMER_STOPPED,
            user_id,
            now,
            new_value=f"{duration}: {note}" if note else str(duration),
            field_changed="duration_minutes",
        )
        logger.info(
            "Timer stopped: task=%s user=%s duration=%s total=%s",
            task_id,
            user_id,
            duration,
            total,
        )
        return TimerStopResult(time_log=closed, total_time_minutes=total)

    async def list_time_logs(self, company_id: str, task_id: str) -> list[TimeLogResult]:
        """Runs of the task, newest first."""
        await self._get_task(company_id, task_id)
        return await self.time_log_repo.list_for_task(task_id)
