"""Domain layer: enums, exceptions, and timer arithmetic.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from worktrack.domain.enums import (
    HistoryAction,
    MembershipScope,
    Permission,
    TaskPriority,
    TaskStatus,
    TaskType,
    TransferAction,
    TransferStatus,
    TransferType,
)
from worktrack.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidStateException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WorktrackException,
)
from worktrack.domain.timekeeping import elapsed_minutes

__all__ = [
    # Enums
    "HistoryAction",
    "MembershipScope",
    "Permission",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "TransferAction",
    "TransferStatus",
    "TransferType",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    "WorktrackException",
    # Timekeeping
    "elapsed_minutes",
]
