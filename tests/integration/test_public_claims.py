"""PublicClaimService against the SQLite test database."""

import pytest

from worktrack.application.dtos.task import TaskCreate
from worktrack.domain.enums import TaskType
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
)


async def _company_public(services, org, **overrides):
    data = dict(title="Restock printer paper", task_type=TaskType.COMPANY, is_public=True)
    data.update(overrides)
    return await services.tasks.create_task(org.company_id, org.manager, TaskCreate(**data))


async def _department_public(services, org):
    return await services.tasks.create_task(
        org.company_id,
        org.manager,
        TaskCreate(
            title="Triage flaky test",
            task_type=TaskType.DEPARTMENT,
            department_id=org.department_id,
            is_public=True,
        ),
    )


async def test_claim_assigns_and_starts_task(services, org, clock) -> None:
    task = await _company_public(services, org)
    clock.advance(minutes=2)
    claimed = await services.claims.accept_public_task(org.company_id, task.id, org.bob)

    assert claimed.assignee_id == org.bob
    assert claimed.accepted_by == org.bob
    assert claimed.accepted_at == clock.now
    assert claimed.status == "in_progress"
    assert claimed.updated_at == clock.now
    history = await services.history_repo.list_for_task(task.id)
    assert history[-1].action == "status_changed"
    assert (history[-1].old_value, history[-1].new_value) == ("todo", "in_progress")
    assert history[-1].changed_by == org.bob


async def test_second_claim_is_conflict(services, org) -> None:
    task = await _company_public(services, org)
    await services.claims.accept_public_task(org.company_id, task.id, org.bob)
    with pytest.raises(ConflictException):
        await services.claims.accept_public_task(org.company_id, task.id, org.alice)
    current = await services.tasks.get_task(org.company_id, task.id)
    assert current.accepted_by == org.bob
    assert await services.history_repo.count_for_task(task.id) == 2


async def test_department_task_needs_department_membership(services, org) -> None:
    task = await _department_public(services, org)
    with pytest.raises(AuthorizationException) as exc_info:
        await services.claims.accept_public_task(org.company_id, task.id, org.carol)
    assert exc_info.value.details == {"resource": "task", "action": "claim"}
    untouched = await services.tasks.get_task(org.company_id, task.id)
    assert untouched.assignee_id is None
    assert untouched.accepted_by is None

    claimed = await services.claims.accept_public_task(org.company_id, task.id, org.alice)
    assert claimed.accepted_by == org.alice


async def test_private_task_cannot_be_claimed(services, org) -> None:
    task = await _company_public(services, org, is_public=False)
    with pytest.raises(ConflictException):
        await services.claims.accept_public_task(org.company_id, task.id, org.bob)


async def test_claim_requires_accept_permission(services, org) -> None:
    task = await _company_public(services, org)
    with pytest.raises(AuthorizationException):
        await services.claims.accept_public_task(org.company_id, task.id, org.viewer)


async def test_claim_of_done_task_records_previous_status(services, org, clock) -> None:
    task = await _company_public(services, org)
    clock.advance(minutes=1)
    await services.tasks.change_status(org.company_id, task.id, "done", org.manager)
    clock.advance(minutes=1)
    claimed = await services.claims.accept_public_task(org.company_id, task.id, org.bob)
    assert claimed.status == "in_progress"
    history = await services.history_repo.list_for_task(task.id)
    assert (history[-1].old_value, history[-1].new_value) == ("done", "in_progress")


async def test_claim_in_other_company_is_not_found(services, org) -> None:
    task = await _company_public(services, org)
    with pytest.raises(ResourceNotFoundException):
        await services.claims.accept_public_task(org.other_company_id, task.id, org.alice)
