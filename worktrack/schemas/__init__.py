"""Pydantic request/response schemas for the API."""

from worktrack.schemas.health import HealthResponse
from worktrack.schemas.history import TaskHistoryResponse
from worktrack.schemas.task import (
    AttachmentCreateRequest,
    AttachmentResponse,
    CommentCreateRequest,
    CommentResponse,
    StatusChangeRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
    TimeLogResponse,
    TimerStopRequest,
    TimerStopResponse,
)
from worktrack.schemas.transfer import (
    TransferCreateRequest,
    TransferRespondRequest,
    TransferResponse,
)

__all__ = [
    "AttachmentCreateRequest",
    "AttachmentResponse",
    "CommentCreateRequest",
    "CommentResponse",
    "HealthResponse",
    "StatusChangeRequest",
    "TaskCreateRequest",
    "TaskHistoryResponse",
    "TaskResponse",
    "TaskUpdateRequest",
    "TimeLogResponse",
    "TimerStopRequest",
    "TimerStopResponse",
    "TransferCreateRequest",
    "TransferRespondRequest",
    "TransferResponse",
]
