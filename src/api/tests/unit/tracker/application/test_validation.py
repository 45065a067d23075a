"""Unit tests for Tracker input validation."""

import pytest

from shared_kernel.exceptions import InvalidArgumentError
from tracker.application.validation import (
    require_priority,
    require_status,
    require_task_id,
    require_text,
    require_user_id,
    validate_email_address,
    validate_task,
    validate_user,
    validate_username,
)
from tracker.domain.value_objects import TaskId, TaskPriority, TaskStatus, UserId


def assert_invalid(message, call, *args):
    with pytest.raises(InvalidArgumentError) as exc_info:
        call(*args)
    assert str(exc_info.value) == message
    return exc_info.value


class TestRequireHelpers:
    """Tests for the require_* helpers."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_text_rejects_blank(self, value):
        error = assert_invalid(
            "First name cannot be null or empty",
            require_text,
            value,
            "first_name",
            "First name",
        )
        assert error.field == "first_name"

    def test_require_text_returns_value(self):
        assert require_text("Ada", "first_name", "First name") == "Ada"

    def test_require_ids(self):
        assert require_user_id(UserId(1)) == UserId(1)
        assert require_user_id(4) == UserId(4)
        assert require_task_id("2") == TaskId(2)
        assert_invalid("User ID cannot be null", require_user_id, None)
        assert_invalid("Task ID cannot be null", require_task_id, None)

    def test_require_ids_rejects_non_positive(self):
        with pytest.raises(InvalidArgumentError):
            require_task_id(0)

    def test_require_status(self):
        assert require_status("COMPLETED") is TaskStatus.COMPLETED
        assert require_status(TaskStatus.TODO) is TaskStatus.TODO
        assert_invalid("Status cannot be null", require_status, None)
        assert_invalid("Invalid status: DONE", require_status, "DONE")

    def test_require_priority(self):
        assert require_priority("HIGH") is TaskPriority.HIGH
        assert_invalid("Priority cannot be null", require_priority, None)
        assert_invalid("Invalid priority: URGENT", require_priority, "URGENT")


class TestUserValidation:
    """Tests for username, email and user candidate validation."""

    @pytest.mark.parametrize("username", ["abc", "a" * 50])
    def test_username_length_bounds_accepted(self, username):
        assert validate_username(username) == username

    @pytest.mark.parametrize("username", ["ab", "a" * 51])
    def test_username_length_bounds_rejected(self, username):
        assert_invalid(
            "Username must be between 3 and 50 characters",
            validate_username,
            username,
        )

    def test_blank_username(self):
        assert_invalid("Username cannot be null or empty", validate_username, " ")

    @pytest.mark.parametrize("email", ["john@example.com", "a.b+c@mail.example.org"])
    def test_valid_email(self, email):
        assert validate_email_address(email) == email

    @pytest.mark.parametrize("email", ["invalid-email", "a@", "@example.com", "a b@x.com"])
    def test_invalid_email(self, email):
        assert_invalid("Email format is invalid", validate_email_address, email)

    def test_blank_email(self):
        assert_invalid("Email cannot be null or empty", validate_email_address, "")

    def test_validate_user(self, make_user):
        user = make_user()
        assert validate_user(user) is user

    def test_validate_user_requires_names(self, make_user):
        assert_invalid(
            "Last name cannot be null or empty",
            validate_user,
            make_user(last_name=""),
        )

    def test_validate_user_none(self):
        assert_invalid("User cannot be null", validate_user, None)


class TestTaskValidation:
    """Tests for task candidate validation."""

    def test_valid_task_is_normalised(self, make_task):
        task = make_task(5, status="IN_PROGRESS", priority="LOW")

        result = validate_task(task)

        assert result.owner_id == UserId(5)
        assert result.status is TaskStatus.IN_PROGRESS
        assert result.priority is TaskPriority.LOW

    def test_status_and_priority_may_be_absent(self, make_task):
        result = validate_task(make_task(UserId(1)))

        assert result.status is None
        assert result.priority is None

    def test_title_boundaries(self, make_task):
        assert validate_task(make_task(UserId(1), title="t" * 100)).title == "t" * 100
        assert_invalid(
            "Task title must not exceed 100 characters",
            validate_task,
            make_task(UserId(1), title="t" * 101),
        )
        assert_invalid(
            "Task title cannot be null or empty",
            validate_task,
            make_task(UserId(1), title="  "),
        )

    def test_description_boundaries(self, make_task):
        assert validate_task(make_task(UserId(1), description="d" * 500))
        assert_invalid(
            "Task description must not exceed 500 characters",
            validate_task,
            make_task(UserId(1), description="d" * 501),
        )
        assert_invalid(
            "Task description cannot be null or empty",
            validate_task,
            make_task(UserId(1), description=None),
        )

    def test_owner_required(self, make_task):
        assert_invalid("User ID cannot be null", validate_task, make_task(None))

    def test_invalid_status(self, make_task):
        assert_invalid(
            "Invalid status: DONE",
            validate_task,
            make_task(UserId(1), status="DONE"),
        )

    def test_none_task(self):
        assert_invalid("Task cannot be null", validate_task, None)
