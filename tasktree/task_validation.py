#!/usr/bin/env python3
"""Record validation and status transitions.

The consistency rules tie three fields together:

- ``completed`` is set exactly when the status is done or cancelled
- ``waiting_on`` is present (and non-empty) exactly when the status is waiting
- every ``waiting_on`` entry is a quoted reference, ``"[[taskid]]"``

``validate_task`` reports the first broken rule as a distinct exception.
``transition`` moves a record between statuses and keeps the rules intact,
changing nothing when the move is refused.

Usage:
    from tasktree.task_validation import transition, validate_task

    transition(task, TaskStatus.DONE, status_of=storage.status_of)
    validate_task(task)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from tasktree.errors import (
    CompletedMissing,
    CompletedNotAllowed,
    InvalidExtensionLine,
    InvalidOwner,
    InvalidPriority,
    InvalidPriorityValue,
    InvalidStatus,
    InvalidTags,
    InvalidTaskIdError,
    InvalidTimestamp,
    InvalidTitle,
    InvalidWaitingOn,
    ShouldBeCancelled,
    ShouldBeDone,
    ShouldBeWaiting,
    TaskValidationError,
    WaitingFoundButAllValid,
    WaitingOnMissing,
)
from tasktree.frontmatter import DELIMITER, is_known_field_line
from tasktree.task_id import format_reference, parse_reference, validate
from tasktree.task_model import (
    PRIORITY_VALUE_MAX,
    Task,
    TaskPriority,
    TaskStatus,
    utc_now,
)

logger = logging.getLogger(__name__)

StatusLookup = Callable[[str], "TaskStatus | None"]


def _check_line_text(value: object, name: str, error: type[TaskValidationError]) -> None:
    if not isinstance(value, str) or not value.strip():
        raise error(f"{name} must be a non-empty string")
    if "\n" in value or "\r" in value:
        raise error(f"{name} must not contain line breaks")
    if value[0] in " \t":
        raise error(f"{name} must not start with whitespace")


def validate_task(task: Task) -> None:
    """Check every invariant of a task record.

    Raises:
        TaskValidationError: The subclass names the first broken rule.
            ``WaitingFoundButAllValid`` is raised before the completed checks
            and is the one case the sync pass repairs automatically.
    """
    _check_line_text(task.title, "title", InvalidTitle)
    _check_line_text(task.owner, "owner", InvalidOwner)
    if not isinstance(task.status, TaskStatus):
        raise InvalidStatus(f"status must be one of {[s.value for s in TaskStatus]}")
    if not isinstance(task.priority, TaskPriority):
        raise InvalidPriority(f"priority must be one of {[p.value for p in TaskPriority]}")
    if (
        isinstance(task.priority_value, bool)
        or not isinstance(task.priority_value, int)
        or not 0 <= task.priority_value <= PRIORITY_VALUE_MAX
    ):
        raise InvalidPriorityValue(f"priority_value must be an integer from 0 to {PRIORITY_VALUE_MAX}")
    for name in ("created", "completed"):
        value = getattr(task, name)
        if value is None and name == "completed":
            continue
        if value is None or value.tzinfo is None:
            raise InvalidTimestamp(f"{name} must be a timezone-aware datetime")

    if task.tags is not None:
        if not task.tags:
            raise InvalidTags("tags must be omitted rather than empty")
        for tag in task.tags:
            if not isinstance(tag, str) or not tag or "\n" in tag or "\r" in tag:
                raise InvalidTags(f"invalid tag {tag!r}")

    if task.waiting_on is not None:
        if not task.waiting_on:
            raise InvalidWaitingOn("waiting_on must be omitted rather than empty")
        for item in task.waiting_on:
            if not isinstance(item, str) or parse_reference(item) is None:
                raise InvalidWaitingOn(f'waiting_on entry {item!r} is not of the form "[[taskid]]"')

    for line in task.extension_lines:
        if "\n" in line or line == DELIMITER or is_known_field_line(line):
            raise InvalidExtensionLine(f"extension line {line!r} cannot be stored verbatim")

    if task.status is TaskStatus.WAITING:
        if not task.waiting_on:
            raise WaitingOnMissing("status is waiting but waiting_on is missing")
    elif task.waiting_on:
        raise WaitingFoundButAllValid(f"status is {task.status.value} but waiting_on is present")

    if task.status.is_finished:
        if task.completed is None:
            raise CompletedMissing(f"status is {task.status.value} but completed is missing")
    elif task.completed is not None:
        raise CompletedNotAllowed(f"status is {task.status.value} but completed is set")


def check_task(task: Task) -> TaskValidationError | None:
    """Like ``validate_task`` but return the error instead of raising it."""
    try:
        validate_task(task)
    except TaskValidationError as e:
        return e
    return None


@dataclass
class TransitionResult:
    """Outcome of a successful transition."""

    from_status: TaskStatus
    to_status: TaskStatus
    released: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.from_status is not self.to_status


def _unresolved(references: Iterable[str], status_of: StatusLookup | None) -> list[str]:
    """References that do not point at a finished task."""
    pending = []
    for item in references:
        task_id = parse_reference(item)
        status = status_of(task_id) if task_id and status_of else None
        if status is None or not status.is_finished:
            pending.append(item)
    return pending


def transition(
    task: Task,
    to: TaskStatus,
    *,
    waiting_on: list[str] | None = None,
    status_of: StatusLookup | None = None,
) -> TransitionResult:
    """Move a task to a new status, updating completed and waiting_on.

    The record is only modified when the transition succeeds. Persisting
    the record and relocating its directory is up to the caller.

    Args:
        task: Record to change in place
        to: Target status
        waiting_on: Bare ids that replace the dependency list. Only valid
            when moving to waiting.
        status_of: Looks up the current status of a task id, returning None
            for unknown ids. Needed to leave waiting while dependencies are
            listed.

    Returns:
        TransitionResult with the ids whose references were released

    Raises:
        ShouldBeWaiting: Moving to waiting without dependencies, or away
            from dependencies that are not all done or cancelled.
        ShouldBeDone: Moving a done task to cancelled.
        ShouldBeCancelled: Moving a cancelled task to done.
        InvalidTaskIdError: A waiting_on id is malformed.
    """
    from_status = task.status

    if to is TaskStatus.WAITING:
        references = task.waiting_on
        if waiting_on is not None:
            for task_id in waiting_on:
                check = validate(task_id)
                if not check.valid:
                    raise InvalidTaskIdError(task_id, check.reason)
            references = [format_reference(task_id) for task_id in waiting_on]
        if not references:
            raise ShouldBeWaiting(
                "A waiting task needs at least one waiting_on entry", from_status, to
            )
        task.status = to
        task.waiting_on = list(references)
        task.completed = None
        logger.debug("Transition %s -> %s", from_status.value, to.value)
        return TransitionResult(from_status, to)

    if waiting_on is not None:
        raise ValueError("waiting_on can only be given when moving to waiting")

    if from_status is TaskStatus.DONE and to is TaskStatus.CANCELLED:
        raise ShouldBeDone("Task is already done; reopen it before cancelling", from_status, to)
    if from_status is TaskStatus.CANCELLED and to is TaskStatus.DONE:
        raise ShouldBeCancelled("Task is cancelled; reopen it before completing", from_status, to)

    released: list[str] = []
    if task.waiting_on:
        pending = _unresolved(task.waiting_on, status_of)
        if pending:
            raise ShouldBeWaiting(
                f"Task is still waiting on {', '.join(pending)}", from_status, to
            )
        released = task.dependency_ids()

    task.status = to
    task.waiting_on = None
    if to.is_finished:
        if task.completed is None:
            task.completed = utc_now()
    else:
        task.completed = None
    logger.debug("Transition %s -> %s", from_status.value, to.value)
    return TransitionResult(from_status, to, released)
