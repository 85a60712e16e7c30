"""PublicClaimService: at-most-one winner and failure diagnosis.

Concurrency is simulated with an in-memory repository whose conditional
write is atomic with respect to the event loop, mirroring the single
conditional UPDATE the SQL repository issues.
"""

import asyncio
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql

from worktrack.application.dtos.task import TaskResult
from worktrack.application.use_cases.tasks import PublicClaimService
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
)
from worktrack.infrastructure.persistence.repositories import build_claim_statement

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _public_task(**overrides) -> TaskResult:
    fields = dict(
        id="t1",
        company_id="c1",
        title="Restock printer paper",
        description=None,
        status="todo",
        priority="medium",
        task_type="company",
        department_id=None,
        created_by="u-admin",
        assignee_id=None,
        due_date=date(2026, 3, 9),
        estimated_hours=None,
        actual_hours=None,
        is_public=True,
        accepted_by=None,
        accepted_at=None,
        is_timer_running=False,
        current_timer_start=None,
        total_time_minutes=0,
        delegated_by=None,
        delegate_id=None,
        delegated_at=None,
        previous_assignee_id=None,
        transfer_reason=None,
        created_at=NOW,
        updated_at=NOW,
    )
    fields.update(overrides)
    return TaskResult(**fields)


class InMemoryClaimRepo:
    """Task store for one task; claim_public_task checks and sets without yielding.

    on_read, if given, runs once after the first get_task to model a
    concurrent writer changing the row between the service's read and its
    claim.
    """

    def __init__(
        self,
        task: TaskResult | None,
        eligible: set[str],
        on_read: Callable[[TaskResult], TaskResult] | None = None,
    ) -> None:
        self.task = task
        self.eligible = eligible
        self.on_read = on_read
        self.claim_attempts = 0

    async def get_task(self, company_id: str, task_id: str) -> TaskResult | None:
        await asyncio.sleep(0)
        seen = self.task
        if seen is not None and self.on_read is not None:
            self.task = self.on_read(seen)
            self.on_read = None
        return seen

    async def claim_public_task(
        self,
        company_id: str,
        task_id: str,
        claimant_id: str,
        accepted_at: datetime,
    ) -> str | None:
        await asyncio.sleep(0)
        self.claim_attempts += 1
        t = self.task
        if (
            t is None
            or not t.is_public
            or t.assignee_id is not None
            or t.accepted_by is not None
            or claimant_id not in self.eligible
        ):
            return None
        self.task = replace(
            t,
            assignee_id=claimant_id,
            accepted_by=claimant_id,
            accepted_at=accepted_at,
            status="in_progress",
            updated_at=accepted_at,
        )
        return t.status


def _service(repo: InMemoryClaimRepo) -> tuple[PublicClaimService, AsyncMock]:
    gate = AsyncMock()
    gate.require_permission = AsyncMock(return_value=None)
    history = AsyncMock()
    return PublicClaimService(repo, history, gate, clock=lambda: NOW), history


async def test_concurrent_claims_have_exactly_one_winner() -> None:
    claimants = [f"u{i}" for i in range(8)]
    repo = InMemoryClaimRepo(_public_task(), eligible=set(claimants))
    svc, history = _service(repo)

    results = await asyncio.gather(
        *(svc.accept_public_task("c1", "t1", user) for user in claimants),
        return_exceptions=True,
    )

    winners = [r for r in results if isinstance(r, TaskResult)]
    conflicts = [r for r in results if isinstance(r, ConflictException)]
    assert len(winners) == 1
    assert len(conflicts) == len(claimants) - 1
    winner = winners[0]
    assert winner.assignee_id == winner.accepted_by
    assert winner.status == "in_progress"
    assert repo.task.accepted_by == winner.accepted_by
    history.append.assert_awaited_once()
    assert repo.claim_attempts == len(claimants)


async def test_ineligible_claimant_gets_authorization_error() -> None:
    repo = InMemoryClaimRepo(_public_task(), eligible={"u-member"})
    svc, history = _service(repo)
    with pytest.raises(AuthorizationException) as exc_info:
        await svc.accept_public_task("c1", "t1", "u-stranger")
    assert exc_info.value.details == {"resource": "task", "action": "claim"}
    assert repo.task.accepted_by is None
    history.append.assert_not_awaited()


async def test_claim_of_assigned_task_is_conflict() -> None:
    repo = InMemoryClaimRepo(_public_task(assignee_id="u-owner"), eligible={"u1"})
    svc, _ = _service(repo)
    with pytest.raises(ConflictException):
        await svc.accept_public_task("c1", "t1", "u1")


async def test_claim_of_missing_task_is_not_found() -> None:
    repo = InMemoryClaimRepo(None, eligible={"u1"})
    svc, _ = _service(repo)
    with pytest.raises(ResourceNotFoundException):
        await svc.accept_public_task("c1", "t1", "u1")
    assert repo.claim_attempts == 0


async def test_claim_records_status_it_replaced() -> None:
    repo = InMemoryClaimRepo(_public_task(status="done"), eligible={"u1"})
    svc, history = _service(repo)
    await svc.accept_public_task("c1", "t1", "u1")
    kwargs = history.append.await_args.kwargs
    assert kwargs["old_value"] == "done"
    assert kwargs["new_value"] == "in_progress"
    assert kwargs["field_changed"] == "status"


def test_claim_statement_is_one_conditional_update() -> None:
    """Precondition and eligibility live in a single UPDATE ... WHERE ... EXISTS."""
    stmt = build_claim_statement("c1", "t1", "u1", NOW)
    sql = str(stmt.compile(dialect=postgresql.dialect()))
    assert sql.startswith("UPDATE task SET")
    assert sql.count("UPDATE") == 1
    assert sql.count("EXISTS") == 2
    assert "FROM department_member" in sql
    assert "FROM company_member" in sql
    # subqueries correlate to the row being updated
    assert "department_member, task" not in sql
    assert "company_member, task" not in sql
    assert "task.assignee_id IS NULL" in sql
    assert "task.accepted_by IS NULL" in sql
    assert "task.is_public IS true" in sql


async def test_status_change_before_claim_does_not_block_it() -> None:
    repo = InMemoryClaimRepo(
        _public_task(status="todo"),
        eligible={"u1"},
        on_read=lambda t: replace(t, status="done"),
    )
    svc, history = _service(repo)
    claimed = await svc.accept_public_task("c1", "t1", "u1")
    assert claimed.accepted_by == "u1"
    assert claimed.status == "in_progress"
    assert history.append.await_args.kwargs["old_value"] == "done"


async def test_claim_made_private_before_claim_is_conflict() -> None:
    repo = InMemoryClaimRepo(
        _public_task(),
        eligible={"u1"},
        on_read=lambda t: replace(t, is_public=False),
    )
    svc, history = _service(repo)
    with pytest.raises(ConflictException):
        await svc.accept_public_task("c1", "t1", "u1")
    history.append.assert_not_awaited()


def test_claim_statement_does_not_pin_status() -> None:
    stmt = build_claim_statement("c1", "t1", "u1", NOW)
    where = str(stmt.whereclause.compile(dialect=postgresql.dialect()))
    assert "task.status" not in where
