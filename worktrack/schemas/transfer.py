"""Transfer / delegation API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from worktrack.domain.enums import TransferAction, TransferType


class TransferCreateRequest(BaseModel):
    """Request body for proposing a transfer or delegation of a task."""

    task_id: str = Field(..., min_length=1)
    to_user_id: str = Field(..., min_length=1)
    transfer_type: TransferType
    reason: str | None = None


class TransferRespondRequest(BaseModel):
    """Accept or reject. A reason is required to reject."""

    action: TransferAction
    response_reason: str | None = None


class TransferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
