"""Task API: thin routes delegating to the task lifecycle services."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from worktrack.api.v1.dependencies import (
    get_claim_service,
    get_collaboration_service,
    get_company_id,
    get_current_user_id,
    get_task_query_service,
    get_task_service,
    get_timer_service,
)
from worktrack.application.dtos import AttachmentCreate, TaskCreate
from worktrack.application.use_cases.tasks import (
    CollaborationService,
    PublicClaimService,
    TaskService,
    TimerService,
)
from worktrack.core.limiter import limit_writes
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

router = APIRouter()

CompanyId = Annotated[str, Depends(get_company_id)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    company_id: CompanyId,
    user_id: CurrentUserId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task (status todo). Personal tasks default to the creator as assignee."""
    created = await task_svc.create_task(
        company_id,
        user_id,
        TaskCreate(
            title=body.title,
            task_type=body.task_type,
            description=body.description,
            priority=body.priority,
            department_id=body.department_id,
            assignee_id=body.assignee_id,
            due_date=body.due_date,
            estimated_hours=body.estimated_hours,
            actual_hours=body.actual_hours,
            is_public=body.is_public,
        ),
    )
    return TaskResponse.model_validate(created)


@router.get("/personal", response_model=list[TaskResponse])
async def list_personal_tasks(
    company_id: CompanyId,
    user_id: CurrentUserId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
):
    """Tasks assigned or delegated to the current user."""
    tasks = await task_svc.list_personal_tasks(company_id, user_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/company", response_model=list[TaskResponse])
async def list_company_tasks(
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
):
    tasks = await task_svc.list_company_tasks(company_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/company/public", response_model=list[TaskResponse])
async def list_public_company_tasks(
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
    unclaimed_only: Annotated[bool, Query()] = False,
):
    """Public company-wide tasks; unclaimed_only hides tasks already claimed."""
    tasks = await task_svc.list_public_company_tasks(company_id, unclaimed_only)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/departments/{department_id}", response_model=list[TaskResponse])
async def list_department_tasks(
    department_id: str,
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
):
    tasks = await task_svc.list_department_tasks(company_id, department_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/departments/{department_id}/public", response_model=list[TaskResponse])
async def list_public_department_tasks(
    department_id: str,
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
    unclaimed_only: Annotated[bool, Query()] = False,
):
    tasks = await task_svc.list_public_department_tasks(
        company_id, department_id, unclaimed_only
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
):
    task = await task_svc.get_task(company_id, task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    company_id: CompanyId,
    user_id: CurrentUserId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Partial update; only fields sent in the body are considered."""
    updated = await task_svc.update_task(
        company_id, task_id, body.model_dump(exclude_unset=True), user_id
    )
    return TaskResponse.model_validate(updated)


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    company_id: CompanyId,
    user_id: CurrentUserId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete the task and everything recorded against it."""
    await task_svc.delete_task(company_id, task_id, user_id)
    return Response(status_code=204)


@router.post("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def change_status(
    request: Request,
    task_id: str,
    body: StatusChangeRequest,
    company_id: CompanyId,
    user_id: CurrentUserId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Move the task to a new status; the same status is a no-op."""
    updated = await task_svc.change_status(company_id, task_id, body.status, user_id)
    return TaskResponse.model_validate(updated)


@router.get("/{task_id}/history", response_model=list[TaskHistoryResponse])
async def list_history(
    task_id: str,
    company_id: CompanyId,
    task_svc: Annotated[TaskService, Depends(get_task_query_service)],
):
    entries = await task_svc.list_history(company_id, task_id)
    return [TaskHistoryResponse.model_validate(e) for e in entries]


@router.post("/{task_id}/timer/start", response_model=TimeLogResponse, status_code=201)
@limit_writes
async def start_timer(
    request: Request,
    task_id: str,
    company_id: CompanyId,
    user_id: CurrentUserId,
    timer_svc: Annotated[TimerService, Depends(get_timer_service)],
):
    """Start the task timer for the current user (409 if already running)."""
    time_log = await timer_svc.start_timer(company_id, task_id, user_id)
    return TimeLogResponse.model_validate(time_log)


@router.post("/{task_id}/timer/stop", response_model=TimerStopResponse)
@limit_writes
async def stop_timer(
    request: Request,
    task_id: str,
    company_id: CompanyId,
    user_id: CurrentUserId,
    timer_svc: Annotated[TimerService, Depends(get_timer_service)],
    body: TimerStopRequest | None = None,
):
    """Stop the current user's running timer and return the new task total."""
    result = await timer_svc.stop_timer(
        company_id, task_id, user_id, body.description if body else None
    )
    return TimerStopResponse.model_validate(result)


@router.get("/{task_id}/time-logs", response_model=list[TimeLogResponse])
async def list_time_logs(
    task_id: str,
    company_id: CompanyId,
    timer_svc: Annotated[TimerService, Depends(get_timer_service)],
):
    logs = await timer_svc.list_time_logs(company_id, task_id)
    return [TimeLogResponse.model_validate(log) for log in logs]


@router.post("/{task_id}/accept", response_model=TaskResponse)
@limit_writes
async def accept_public_task(
    request: Request,
    task_id: str,
    company_id: CompanyId,
    user_id: CurrentUserId,
    claim_svc: Annotated[PublicClaimService, Depends(get_claim_service)],
):
    """Claim a public task. At most one concurrent claimant wins; the rest get 409."""
    task = await claim_svc.accept_public_task(company_id, task_id, user_id)
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=201)
@limit_writes
async def add_comment(
    request: Request,
    task_id: str,
    body: CommentCreateRequest,
    company_id: CompanyId,
    user_id: CurrentUserId,
    collab_svc: Annotated[CollaborationService, Depends(get_collaboration_service)],
):
    comment = await collab_svc.add_comment(company_id, task_id, body.content, user_id)
    return CommentResponse.model_validate(comment)


@router.get("/{task_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    task_id: str,
    company_id: CompanyId,
    collab_svc: Annotated[CollaborationService, Depends(get_collaboration_service)],
):
    comments = await collab_svc.list_comments(company_id, task_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/{task_id}/attachments", response_model=AttachmentResponse, status_code=201
)
@limit_writes
async def add_attachment(
    request: Request,
    task_id: str,
    body: AttachmentCreateRequest,
    company_id: CompanyId,
    user_id: CurrentUserId,
    collab_svc: Annotated[CollaborationService, Depends(get_collaboration_service)],
):
    """Record attachment metadata; the file itself lives in external storage."""
    attachment = await collab_svc.add_attachment(
        company_id,
        task_id,
        AttachmentCreate(
            file_name=body.file_name,
            file_url=body.file_url,
            file_size=body.file_size,
            file_type=body.file_type,
        ),
        user_id,
    )
    return AttachmentResponse.model_validate(attachment)


@router.get("/{task_id}/attachments", response_model=list[AttachmentResponse])
async def list_attachments(
    task_id: str,
    company_id: CompanyId,
    collab_svc: Annotated[CollaborationService, Depends(get_collaboration_service)],
):
    attachments = await collab_svc.list_attachments(company_id, task_id)
    return [AttachmentResponse.model_validate(a) for a in attachments]
