"""Application ports: repository and service protocols."""

from worktrack.application.interfaces.repositories import (
    ITaskAttachmentRepository,
    ITaskCommentRepository,
    ITaskHistoryRepository,
    ITaskRepository,
    ITaskTimeLogRepository,
    ITaskTransferRepository,
)
from worktrack.application.interfaces.services import (
    ICacheService,
    IMembershipOracle,
    IPermissionResolver,
)

__all__ = [
    "ICacheService",
    "IMembershipOracle",
    "IPermissionResolver",
    "ITaskAttachmentRepository",
    "ITaskCommentRepository",
    "ITaskHistoryRepository",
    "ITaskRepository",
    "ITaskTimeLogRepository",
    "ITaskTransferRepository",
]
