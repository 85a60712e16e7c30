"""Transfer API: propose, answer and list task transfers and delegations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from worktrack.api.v1.dependencies import (
    get_company_id,
    get_current_user_id,
    get_transfer_service,
)
from worktrack.application.use_cases.tasks import TransferService
from worktrack.core.limiter import limit_writes
from worktrack.schemas.transfer import (
    TransferCreateRequest,
    TransferRespondRequest,
    TransferResponse,
)

router = APIRouter()


@router.post("", response_model=TransferResponse, status_code=201)
@limit_writes
async def create_transfer(
    request: Request,
    body: TransferCreateRequest,
    company_id: Annotated[str, Depends(get_company_id)],
    user_id: Annotated[str, Depends(get_current_user_id)],
    transfer_svc: Annotated[TransferService, Depends(get_transfer_service)],
):
    """Open a pending transfer or delegation from the task's current owner."""
    transfer = await transfer_svc.create_transfer(
        company_id,
        body.task_id,
        body.to_user_id,
        body.transfer_type,
        body.reason,
        user_id,
    )
    return TransferResponse.model_validate(transfer)


@router.get("/pending", response_model=list[TransferResponse])
async def list_pending_transfers(
    company_id: Annotated[str, Depends(get_company_id)],
    user_id: Annotated[str, Depends(get_current_user_id)],
    transfer_svc: Annotated[TransferService, Depends(get_transfer_service)],
):
    """Pending transfers addressed to the current user."""
    transfers = await transfer_svc.list_pending_transfers_for(company_id, user_id)
    return [TransferResponse.model_validate(t) for t in transfers]


@router.get("/history", response_model=list[TransferResponse])
async def list_transfer_history(
    company_id: Annotated[str, Depends(get_company_id)],
    user_id: Annotated[str, Depends(get_current_user_id)],
    transfer_svc: Annotated[TransferService, Depends(get_transfer_service)],
):
    """Transfers the current user sent, received or requested."""
    transfers = await transfer_svc.list_transfer_history(company_id, user_id)
    return [TransferResponse.model_validate(t) for t in transfers]


@router.post("/{transfer_id}/respond", response_model=TransferResponse)
@limit_writes
async def respond_to_transfer(
    request: Request,
    transfer_id: str,
    body: TransferRespondRequest,
    company_id: Annotated[str, Depends(get_company_id)],
    user_id: Annotated[str, Depends(get_current_user_id)],
    transfer_svc: Annotated[TransferService, Depends(get_transfer_service)],
):
    """Accept or reject a pending transfer addressed to the current user."""
    transfer = await transfer_svc.respond_to_transfer(
        company_id, transfer_id, body.action, body.response_reason, user_id
    )
    return TransferResponse.model_validate(transfer)
