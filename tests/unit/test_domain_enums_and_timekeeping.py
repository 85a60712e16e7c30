"""Domain enums and elapsed-minute rounding."""

from datetime import UTC, datetime, timedelta

import pytest

from worktrack.domain.enums import (
    HistoryAction,
    Permission,
    TaskPriority,
    TaskStatus,
    TaskType,
    TransferStatus,
)
from worktrack.domain.timekeeping import elapsed_minutes

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def test_enum_values_are_storage_strings() -> None:
    assert TaskStatus.values() == ["todo", "in_progress", "done"]
    assert TaskPriority.values() == ["high", "medium", "low"]
    assert TransferStatus.values() == ["pending", "accepted", "rejected"]
    assert "attachment_added" in HistoryAction.values()


def test_claimable_scope() -> None:
    assert not TaskType.PERSONAL.is_claimable_scope
    assert TaskType.DEPARTMENT.is_claimable_scope
    assert TaskType.COMPANY.is_claimable_scope


@pytest.mark.parametrize(
    ("task_type", "permission"),
    [
        (TaskType.PERSONAL, Permission.CREATE_PERSONAL_TASKS),
        (TaskType.DEPARTMENT, Permission.CREATE_DEPARTMENT_TASKS),
        (TaskType.COMPANY, Permission.CREATE_COMPANY_TASKS),
    ],
)
def test_creation_permission_per_task_type(
    task_type: TaskType, permission: Permission
) -> None:
    assert Permission.for_task_creation(task_type) is permission


@pytest.mark.parametrize(
    ("seconds", "minutes"),
    [
        (180, 3),
        (90, 2),
        (30, 1),
        (29, 0),
        (0, 0),
        (149.999, 2),
        (150, 3),
    ],
)
def test_elapsed_minutes_rounds_half_up(seconds: float, minutes: int) -> None:
    assert elapsed_minutes(T0, T0 + timedelta(seconds=seconds)) == minutes


def test_elapsed_minutes_negative_interval_is_zero() -> None:
    assert elapsed_minutes(T0, T0 - timedelta(minutes=5)) == 0
