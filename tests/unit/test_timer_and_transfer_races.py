"""Lost conditional writes surface as ConflictException and write nothing else."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from worktrack.application.dtos.time_log import TimeLogResult
from worktrack.application.dtos.transfer import TransferResult
from worktrack.application.use_cases.tasks import TimerService, TransferService
from worktrack.domain.enums import TransferAction
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    InvalidStateException,
    ValidationException,
)

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _gate() -> AsyncMock:
    gate = AsyncMock()
    gate.require_permission = AsyncMock(return_value=None)
    return gate


def _task(is_timer_running: bool = False) -> MagicMock:
    task = MagicMock()
    task.is_timer_running = is_timer_running
    return task


def _transfer(status: str = "pending") -> TransferResult:
    return TransferResult(
        id="tr1",
        company_id="c1",
        task_id="t1",
        from_user_id="u-from",
        to_user_id="u-to",
        transfer_type="transfer",
        reason="Going on leave",
        status=status,
        requested_by="u-from",
        requested_at=NOW,
        responded_at=None,
        response_reason=None,
    )


async def test_start_timer_lost_race_is_conflict() -> None:
    task_repo = AsyncMock()
    task_repo.get_task = AsyncMock(return_value=_task(is_timer_running=False))
    task_repo.try_start_timer = AsyncMock(return_value=False)
    time_log_repo = AsyncMock()
    history = AsyncMock()
    svc = TimerService(task_repo, time_log_repo, history, _gate(), clock=lambda: NOW)

    with pytest.raises(ConflictException):
        await svc.start_timer("c1", "t1", "u1")
    time_log_repo.create_open.assert_not_awaited()
    history.append.assert_not_awaited()


async def test_start_timer_already_running_is_conflict_without_write() -> None:
    task_repo = AsyncMock()
    task_repo.get_task = AsyncMock(return_value=_task(is_timer_running=True))
    svc = TimerService(task_repo, AsyncMock(), AsyncMock(), _gate(), clock=lambda: NOW)
    with pytest.raises(ConflictException):
        await svc.start_timer("c1", "t1", "u1")
    task_repo.try_start_timer.assert_not_awaited()


async def test_stop_timer_without_open_run_is_invalid_state() -> None:
    task_repo = AsyncMock()
    task_repo.get_task = AsyncMock(return_value=_task(is_timer_running=False))
    time_log_repo = AsyncMock()
    time_log_repo.get_latest_open = AsyncMock(return_value=None)
    svc = TimerService(task_repo, time_log_repo, AsyncMock(), _gate(), clock=lambda: NOW)
    with pytest.raises(InvalidStateException):
        await svc.stop_timer("c1", "t1", "u1")


async def test_stop_timer_lost_close_is_conflict() -> None:
    task_repo = AsyncMock()
    task_repo.get_task = AsyncMock(return_value=_task(is_timer_running=True))
    time_log_repo = AsyncMock()
    time_log_repo.get_latest_open = AsyncMock(
        return_value=TimeLogResult(
            id="log1",
            task_id="t1",
            user_id="u1",
            started_at=NOW,
            ended_at=None,
            duration_minutes=None,
            description=None,
        )
    )
    time_log_repo.close = AsyncMock(return_value=None)
    svc = TimerService(task_repo, time_log_repo, AsyncMock(), _gate(), clock=lambda: NOW)
    with pytest.raises(ConflictException):
        await svc.stop_timer("c1", "t1", "u1")
    task_repo.finish_timer.assert_not_awaited()


def _transfer_service(transfer: TransferResult, respond_wins: bool = True):
    task_repo = AsyncMock()
    transfer_repo = AsyncMock()
    transfer_repo.get_transfer = AsyncMock(return_value=transfer)
    transfer_repo.respond_if_pending = AsyncMock(return_value=respond_wins)
    svc = TransferService(task_repo, transfer_repo, AsyncMock(), _gate(), clock=lambda: NOW)
    return svc, task_repo, transfer_repo


async def test_respond_lost_race_is_conflict_and_task_untouched() -> None:
    svc, task_repo, _ = _transfer_service(_transfer(), respond_wins=False)
    with pytest.raises(ConflictException):
        await svc.respond_to_transfer("c1", "tr1", TransferAction.ACCEPT, None, "u-to")
    task_repo.update_fields.assert_not_awaited()


async def test_respond_to_answered_transfer_is_conflict() -> None:
    svc, _, transfer_repo = _transfer_service(_transfer(status="rejected"))
    with pytest.raises(ConflictException):
        await svc.respond_to_transfer("c1", "tr1", TransferAction.ACCEPT, None, "u-to")
    transfer_repo.respond_if_pending.assert_not_awaited()


async def test_respond_by_someone_else_is_denied() -> None:
    svc, _, transfer_repo = _transfer_service(_transfer())
    with pytest.raises(AuthorizationException):
        await svc.respond_to_transfer("c1", "tr1", TransferAction.ACCEPT, None, "u-from")
    transfer_repo.respond_if_pending.assert_not_awaited()


@pytest.mark.parametrize("reason", [None, "", "   "])
async def test_reject_requires_reason(reason: str | None) -> None:
    svc, _, transfer_repo = _transfer_service(_transfer())
    with pytest.raises(ValidationException) as exc_info:
        await svc.respond_to_transfer("c1", "tr1", TransferAction.REJECT, reason, "u-to")
    assert exc_info.value.details == {"field": "response_reason"}
    transfer_repo.respond_if_pending.assert_not_awaited()
