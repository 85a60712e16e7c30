"""TimerService against the SQLite test database."""

import pytest

from worktrack.application.dtos.task import TaskCreate
from worktrack.domain.enums import TaskType
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    InvalidStateException,
    ResourceNotFoundException,
)


@pytest.fixture
async def task(services, org):
    return await services.tasks.create_task(
        org.company_id, org.alice, TaskCreate(title="Pair on bug", task_type=TaskType.PERSONAL)
    )


async def _run(services, org, task_id: str, clock, user_id: str, **elapsed) -> int:
    await services.timers.start_timer(org.company_id, task_id, user_id)
    clock.advance(**elapsed)
    result = await services.timers.stop_timer(org.company_id, task_id, user_id)
    return result.total_time_minutes


async def test_start_then_stop_records_rounded_minutes(services, org, clock, task) -> None:
    started = await services.timers.start_timer(org.company_id, task.id, org.alice)
    assert started.is_open
    assert started.started_at == clock.now
    running = await services.tasks.get_task(org.company_id, task.id)
    assert running.is_timer_running
    assert running.current_timer_start == clock.now

    clock.advance(seconds=180)
    result = await services.timers.stop_timer(org.company_id, task.id, org.alice)

    assert result.time_log.duration_minutes == 3
    assert result.time_log.ended_at == clock.now
    assert result.total_time_minutes == 3
    stopped = await services.tasks.get_task(org.company_id, task.id)
    assert not stopped.is_timer_running
    assert stopped.current_timer_start is None
    assert stopped.total_time_minutes == 3


async def test_total_is_sum_of_closed_runs(services, org, clock, task) -> None:
    assert await _run(services, org, task.id, clock, org.alice, minutes=10) == 10
    assert await _run(services, org, task.id, clock, org.alice, minutes=5) == 15
    assert await _run(services, org, task.id, clock, org.alice, minutes=3) == 18


async def test_ninety_seconds_rounds_up_to_two(services, org, clock, task) -> None:
    assert await _run(services, org, task.id, clock, org.alice, seconds=90) == 2


async def test_second_start_is_conflict(services, org, task) -> None:
    await services.timers.start_timer(org.company_id, task.id, org.alice)
    with pytest.raises(ConflictException):
        await services.timers.start_timer(org.company_id, task.id, org.alice)
    with pytest.raises(ConflictException):
        await services.timers.start_timer(org.company_id, task.id, org.bob)
    logs = await services.timers.list_time_logs(org.company_id, task.id)
    assert len(logs) == 1


async def test_stop_without_running_timer_is_invalid_state(services, org, task) -> None:
    with pytest.raises(InvalidStateException):
        await services.timers.stop_timer(org.company_id, task.id, org.alice)


async def test_stop_only_closes_own_run(services, org, task) -> None:
    await services.timers.start_timer(org.company_id, task.id, org.alice)
    with pytest.raises(InvalidStateException):
        await services.timers.stop_timer(org.company_id, task.id, org.bob)


async def test_stop_description_is_stored_and_quoted_in_history(
    services, org, clock, task
) -> None:
    clock.advance(seconds=1)
    await services.timers.start_timer(org.company_id, task.id, org.alice)
    clock.advance(minutes=3)
    result = await services.timers.stop_timer(
        org.company_id, task.id, org.alice, description="  reproduced locally  "
    )
    assert result.time_log.description == "reproduced locally"
    history = await services.history_repo.list_for_task(task.id)
    assert [h.action for h in history] == ["created", "timer_started", "timer_stopped"]
    assert history[-1].new_value == "3: reproduced locally"
    assert history[-1].field_changed == "duration_minutes"


async def test_time_logs_newest_first(services, org, clock, task) -> None:
    await _run(services, org, task.id, clock, org.alice, minutes=1)
    clock.advance(minutes=1)
    await _run(services, org, task.id, clock, org.alice, minutes=2)
    logs = await services.timers.list_time_logs(org.company_id, task.id)
    assert [log.duration_minutes for log in logs] == [2, 1]


async def test_timer_requires_edit_permission(services, org, task) -> None:
    with pytest.raises(AuthorizationException):
        await services.timers.start_timer(org.company_id, task.id, org.viewer)


async def test_timer_on_missing_task_is_not_found(services, org) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.timers.start_timer(org.company_id, "missing", org.alice)
