"""Application DTOs (no ORM dependency)."""

from worktrack.application.dtos.collaboration import (
    AttachmentCreate,
    AttachmentResult,
    CommentResult,
)
from worktrack.application.dtos.history import TaskHistoryResult
from worktrack.application.dtos.task import TaskCreate, TaskResult
from worktrack.application.dtos.time_log import TimeLogResult, TimerStopResult
from worktrack.application.dtos.transfer import TransferCreate, TransferResult

__all__ = [
    "AttachmentCreate",
    "AttachmentResult",
    "CommentResult",
    "TaskCreate",
    "TaskHistoryResult",
    "TaskResult",
    "TimeLogResult",
    "TimerStopResult",
    "TransferCreate",
    "TransferResult",
]
