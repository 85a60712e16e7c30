"""DTOs for task timer runs."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeLogResult:
    """Timer run read-model. ended_at None means the run is still open."""

    id: str
    task_id: str
    user_id: str
    started_at: datetime
    ended_at: datetime | None
    duration_minutes: int | None
    description: str | None

    @property
    def is_open(self) -> bool:
        return self.ended_at is None


@dataclass(frozen=True)
class TimerStopResult:
    """Outcome of stopping a timer: the closed run and the task's new total."""

    time_log: TimeLogResult
    total_time_minutes: int
