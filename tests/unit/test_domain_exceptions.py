"""Tests for domain exceptions (error_code, message, details)."""

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


def test_worktrack_exception_default_error_code() -> None:
    """Base WorktrackException uses class name as error_code when not provided."""
    exc = WorktrackException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "WorktrackException"
    assert exc.details == {}


def test_worktrack_exception_to_dict() -> None:
    exc = WorktrackException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception_with_field() -> None:
    exc = ValidationException("Title must not be empty", field="title")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "title"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_resource_and_action() -> None:
    """Resource and action produce a descriptive message and details."""
    exc = AuthorizationException(resource="task", action="edit_tasks")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: edit_tasks on task"
    assert exc.details == {"resource": "task", "action": "edit_tasks"}


def test_authorization_exception_default() -> None:
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("task", "t-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "t-1" in exc.message
    assert exc.details == {"resource_type": "task", "resource_id": "t-1"}


def test_conflict_exception() -> None:
    exc = ConflictException("Task is not available to claim", "task", "t-1")
    assert exc.error_code == "CONFLICT"
    assert exc.details == {"resource_type": "task", "resource_id": "t-1"}


def test_invalid_state_exception() -> None:
    exc = InvalidStateException("No running timer", state="stopped")
    assert exc.error_code == "INVALID_STATE"
    assert exc.details == {"state": "stopped"}


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert "SQL database" in exc.message
