"""Tests for record validation and status transitions."""

import copy
from datetime import UTC, datetime

import pytest

from tasktree.errors import (
    CompletedMissing,
    CompletedNotAllowed,
    InvalidExtensionLine,
    InvalidOwner,
    InvalidPriorityValue,
    InvalidTags,
    InvalidTaskIdError,
    InvalidTitle,
    InvalidWaitingOn,
    ShouldBeCancelled,
    ShouldBeDone,
    ShouldBeWaiting,
    TaskValidationError,
    WaitingFoundButAllValid,
    WaitingOnMissing,
)
from tasktree.task_model import Task, TaskPriority, TaskStatus
from tasktree.task_validation import check_task, transition, validate_task

CREATED = datetime(2026, 1, 5, 10, 0, tzinfo=UTC)
EARLIER = datetime(2026, 1, 6, 12, 0, tzinfo=UTC)


def make_task(**overrides) -> Task:
    fields = {
        "title": "Write tests",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.MEDIUM,
        "priority_value": 50,
        "owner": "sam",
        "created": CREATED,
    }
    fields.update(overrides)
    return Task(**fields)


def lookup(statuses: dict[str, TaskStatus]):
    return statuses.get


# -----------------------------------------------------------------------------
# validate_task
# -----------------------------------------------------------------------------


def test_valid_records_pass() -> None:
    validate_task(make_task())
    validate_task(make_task(status=TaskStatus.DONE, completed=EARLIER))
    validate_task(make_task(status=TaskStatus.WAITING, waiting_on=['"[[abc_def_123]]"']))
    validate_task(make_task(tags=["a"], extension_lines=["estimate: 2h"]))


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"title": ""}, InvalidTitle),
        ({"title": "two\nlines"}, InvalidTitle),
        ({"title": "carriage\rreturn"}, InvalidTitle),
        ({"title": " leading space"}, InvalidTitle),
        ({"owner": ""}, InvalidOwner),
        ({"priority_value": 256}, InvalidPriorityValue),
        ({"priority_value": -1}, InvalidPriorityValue),
        ({"tags": []}, InvalidTags),
        ({"tags": ["ok", ""]}, InvalidTags),
        ({"tags": ["a\nb"]}, InvalidTags),
        ({"tags": ["a\rb"]}, InvalidTags),
        ({"status": TaskStatus.WAITING, "waiting_on": []}, InvalidWaitingOn),
        ({"status": TaskStatus.WAITING, "waiting_on": ["abc_def_123"]}, InvalidWaitingOn),
        ({"status": TaskStatus.WAITING, "waiting_on": ['"[[nope]]"']}, InvalidWaitingOn),
        ({"status": TaskStatus.WAITING}, WaitingOnMissing),
        ({"waiting_on": ['"[[abc_def_123]]"']}, WaitingFoundButAllValid),
        ({"status": TaskStatus.DONE}, CompletedMissing),
        ({"status": TaskStatus.CANCELLED}, CompletedMissing),
        ({"completed": EARLIER}, CompletedNotAllowed),
        (
            {"status": TaskStatus.WAITING, "waiting_on": ['"[[abc_def_123]]"'], "completed": EARLIER},
            CompletedNotAllowed,
        ),
        ({"extension_lines": ["title: shadow"]}, InvalidExtensionLine),
        ({"extension_lines": ["---"]}, InvalidExtensionLine),
    ],
)
def test_each_broken_rule_has_its_own_error(overrides, expected) -> None:
    with pytest.raises(expected):
        validate_task(make_task(**overrides))


def test_waiting_found_is_reported_before_completed_checks() -> None:
    task = make_task(status=TaskStatus.DONE, waiting_on=['"[[abc_def_123]]"'])
    error = check_task(task)
    assert isinstance(error, WaitingFoundButAllValid)
    assert error.correctable
    assert error.code == "validation_failed"


def test_check_task_returns_none_for_valid_record() -> None:
    assert check_task(make_task()) is None
    assert isinstance(check_task(make_task(title="")), TaskValidationError)


# -----------------------------------------------------------------------------
# transition
# -----------------------------------------------------------------------------


def test_waiting_task_released_when_dependencies_finish() -> None:
    task = make_task(
        status=TaskStatus.WAITING,
        waiting_on=['"[[abc_def_123]]"', '"[[xyz_geo_456]]"'],
    )
    statuses = {"abc_def_123": TaskStatus.DONE, "xyz_geo_456": TaskStatus.CANCELLED}

    result = transition(task, TaskStatus.TODO, status_of=lookup(statuses))

    assert task.status is TaskStatus.TODO
    assert task.waiting_on is None
    assert task.completed is None
    assert result.released == ["abc_def_123", "xyz_geo_456"]
    validate_task(task)


@pytest.mark.parametrize(
    "statuses",
    [
        {"abc_def_123": TaskStatus.DONE, "xyz_geo_456": TaskStatus.STARTED},
        {"abc_def_123": TaskStatus.DONE},  # second one missing
    ],
)
def test_unfinished_dependency_blocks_leaving_waiting(statuses) -> None:
    task = make_task(
        status=TaskStatus.WAITING,
        waiting_on=['"[[abc_def_123]]"', '"[[xyz_geo_456]]"'],
    )
    before = copy.deepcopy(task)

    with pytest.raises(ShouldBeWaiting) as excinfo:
        transition(task, TaskStatus.DONE, status_of=lookup(statuses))

    assert task == before, "a refused transition must not modify the record"
    assert excinfo.value.from_status is TaskStatus.WAITING
    assert excinfo.value.to_status is TaskStatus.DONE


def test_leaving_waiting_without_a_lookup_is_refused() -> None:
    task = make_task(status=TaskStatus.WAITING, waiting_on=['"[[abc_def_123]]"'])
    with pytest.raises(ShouldBeWaiting):
        transition(task, TaskStatus.STARTED)


def test_done_twice_keeps_completed() -> None:
    task = make_task()
    transition(task, TaskStatus.DONE)
    first = task.completed
    assert first is not None

    task.completed = EARLIER
    transition(task, TaskStatus.DONE)
    assert task.completed == EARLIER


def test_done_sets_completed_timestamp_in_utc() -> None:
    task = make_task(status=TaskStatus.STARTED)
    transition(task, TaskStatus.DONE)
    assert task.completed.tzinfo is not None
    assert task.completed.microsecond == 0
    validate_task(task)


def test_reopening_clears_completed() -> None:
    task = make_task(status=TaskStatus.DONE, completed=EARLIER)
    transition(task, TaskStatus.TODO)
    assert task.status is TaskStatus.TODO
    assert task.completed is None


def test_done_and_cancelled_cannot_be_swapped() -> None:
    done = make_task(status=TaskStatus.DONE, completed=EARLIER)
    with pytest.raises(ShouldBeDone):
        transition(done, TaskStatus.CANCELLED)
    assert done.status is TaskStatus.DONE

    cancelled = make_task(status=TaskStatus.CANCELLED, completed=EARLIER)
    with pytest.raises(ShouldBeCancelled):
        transition(cancelled, TaskStatus.DONE)
    assert cancelled.status is TaskStatus.CANCELLED


def test_moving_to_waiting_needs_dependencies() -> None:
    task = make_task()
    with pytest.raises(ShouldBeWaiting):
        transition(task, TaskStatus.WAITING)
    with pytest.raises(ShouldBeWaiting):
        transition(task, TaskStatus.WAITING, waiting_on=[])
    assert task.status is TaskStatus.TODO


def test_moving_to_waiting_formats_references_and_clears_completed() -> None:
    task = make_task(status=TaskStatus.DONE, completed=EARLIER)
    transition(task, TaskStatus.WAITING, waiting_on=["abc_def_123"])
    assert task.status is TaskStatus.WAITING
    assert task.waiting_on == ['"[[abc_def_123]]"']
    assert task.completed is None
    validate_task(task)


def test_moving_to_waiting_rejects_malformed_ids() -> None:
    task = make_task()
    with pytest.raises(InvalidTaskIdError):
        transition(task, TaskStatus.WAITING, waiting_on=["not-an-id"])
    assert task.status is TaskStatus.TODO


def test_waiting_on_only_applies_to_waiting() -> None:
    with pytest.raises(ValueError):
        transition(make_task(), TaskStatus.DONE, waiting_on=["abc_def_123"])
