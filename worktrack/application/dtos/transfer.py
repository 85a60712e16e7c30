"""DTOs for the transfer / delegation workflow."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TransferCreate:
    """Input for persisting a pending transfer (from_user_id already derived)."""

    task_id: str
    from_user_id: str
    to_user_id: str
    transfer_type: str
    reason: str | None
    requested_by: str
    requested_at: datetime


@dataclass(frozen=True)
class TransferResult:
    """Transfer read-model."""

    id: str
    company_id: str
    task_id: str
    from_user_id: str
    to_user_id: str
    transfer_type: str
    reason: str | None
    status: str
    requested_by: str
    requested_at: datetime
    responded_at: datetime | None
    response_reason: str | None
