"""Task lifecycle use cases."""

from worktrack.application.use_cases.tasks.claim_operations import PublicClaimService
from worktrack.application.use_cases.tasks.collaboration_operations import (
    CollaborationService,
)
from worktrack.application.use_cases.tasks.task_operations import TaskService
from worktrack.application.use_cases.tasks.timer_operations import TimerService
from worktrack.application.use_cases.tasks.transfer_operations import TransferService

__all__ = [
    "CollaborationService",
    "PublicClaimService",
    "TaskService",
    "TimerService",
    "TransferService",
]
