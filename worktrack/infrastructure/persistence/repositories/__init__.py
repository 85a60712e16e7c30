"""Repositories: persistence adapters returning application DTOs."""

from worktrack.infrastructure.persistence.repositories.base import BaseRepository
from worktrack.infrastructure.persistence.repositories.collaboration_repo import (
    TaskAttachmentRepository,
    TaskCommentRepository,
)
from worktrack.infrastructure.persistence.repositories.history_repo import (
    TaskHistoryRepository,
)
from worktrack.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)
from worktrack.infrastructure.persistence.repositories.task_repo import (
    TaskRepository,
    build_claim_statement,
)
from worktrack.infrastructure.persistence.repositories.time_log_repo import (
    TaskTimeLogRepository,
)
from worktrack.infrastructure.persistence.repositories.transfer_repo import (
    TaskTransferRepository,
)

__all__ = [
    "BaseRepository",
    "MembershipRepository",
    "TaskAttachmentRepository",
    "TaskCommentRepository",
    "TaskHistoryRepository",
    "TaskRepository",
    "TaskTimeLogRepository",
    "TaskTransferRepository",
    "build_claim_statement",
]
