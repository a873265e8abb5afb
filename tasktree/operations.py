"""Task operations shared by the CLI and the MCP server.

Each operation takes a ``TaskStorage`` and plain values (strings, lists,
ints) and returns plain dicts, so both front ends only translate arguments
and errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeVar

from tasktree.errors import InvalidRequestError
from tasktree.task_model import TaskPriority, TaskStatus
from tasktree.task_storage import StoredTask, TaskStorage
from tasktree.task_sync import TaskSyncService
from tasktree.task_validation import transition

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

FIELD_NAMES = (
    "id",
    "status",
    "title",
    "priority",
    "priority_value",
    "owner",
    "created",
    "completed",
    "description",
    "tags",
    "waiting_on",
    "file_path",
)
DEFAULT_FIELDS = ("id", "status", "title")


def parse_enum(enum_cls: type[E], value: str | E | None, name: str) -> E | None:
    """Convert request text to an enum member, case-sensitively."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidRequestError(f"Invalid {name} {value!r}; expected one of: {choices}") from None


class MatchMode(Enum):
    AND = "and"
    OR = "or"


@dataclass
class ListFilter:
    """Match a list field against several values."""

    values: list[str]
    mode: MatchMode = MatchMode.OR

    @classmethod
    def parse(cls, text: str) -> ListFilter:
        """Parse ``a,b``, ``or:a,b`` or ``and:a,b``."""
        mode = MatchMode.OR
        head, sep, rest = text.partition(":")
        if sep and head in (MatchMode.AND.value, MatchMode.OR.value):
            mode = MatchMode(head)
            text = rest
        values = [value.strip() for value in text.split(",") if value.strip()]
        if not values:
            raise InvalidRequestError(f"Empty filter {text!r}")
        return cls(values, mode)

    def matches(self, items: list[str] | None) -> bool:
        present = set(items or [])
        if self.mode is MatchMode.AND:
            return all(value in present for value in self.values)
        return any(value in present for value in self.values)


@dataclass
class TaskQuery:
    """Filters for find and pick. Every given filter must match."""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    owner: str | None = None
    tags: ListFilter | None = None
    waiting_on: ListFilter | None = None

    def matches(self, stored: StoredTask) -> bool:
        task = stored.task
        if self.status is not None and task.status is not self.status:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        if self.owner is not None and task.owner != self.owner:
            return False
        if self.tags is not None and not self.tags.matches(task.tags):
            return False
        if self.waiting_on is not None and not self.waiting_on.matches(task.dependency_ids()):
            return False
        return True


@dataclass
class TaskFields:
    names: tuple[str, ...] = DEFAULT_FIELDS

    @classmethod
    def parse(cls, names: list[str] | None) -> TaskFields:
        if not names:
            return cls()
        unknown = [name for name in names if name not in FIELD_NAMES]
        if unknown:
            raise InvalidRequestError(
                f"Unknown field(s): {', '.join(unknown)}; expected any of: {', '.join(FIELD_NAMES)}"
            )
        return cls(tuple(names))

    def select(self, stored: StoredTask) -> dict[str, Any]:
        data = stored.to_dict()
        return {name: data[name] for name in self.names}


def create_task(
    storage: TaskStorage,
    title: str,
    *,
    description: str = "",
    priority: str | TaskPriority | None = None,
    priority_value: int | None = None,
    tags: list[str] | None = None,
    waiting_on: list[str] | None = None,
    owner: str | None = None,
) -> dict[str, Any]:
    """Create a task. It starts out waiting when dependencies are given."""
    stored = storage.create_task(
        title,
        description=description,
        priority=parse_enum(TaskPriority, priority, "priority"),
        priority_value=priority_value,
        tags=tags,
        waiting_on=waiting_on,
        owner=owner,
    )
    return {
        "task_id": stored.task_id,
        "status": stored.task.status.value,
        "file_path": str(stored.path),
    }


def get_task(storage: TaskStorage, task_id: str) -> dict[str, Any]:
    return storage.load(task_id).to_dict()


def update_task(
    storage: TaskStorage,
    task_id: str,
    *,
    status: str | TaskStatus | None = None,
    title: str | None = None,
    description: str | None = None,
    priority: str | TaskPriority | None = None,
    priority_value: int | None = None,
    tags: list[str] | None = None,
    waiting_on: list[str] | None = None,
    owner: str | None = None,
) -> dict[str, Any]:
    """Edit a task and move it if its status changed.

    Args:
        storage: Task store
        task_id: Task to update
        status: New status. Leaving waiting requires every dependency to be
            done or cancelled.
        title: New title
        description: New markdown body
        priority: New priority bucket
        priority_value: New ordering value (0-255)
        tags: Replacement tags; an empty list removes them
        waiting_on: Replacement dependency ids. Without ``status`` this
            moves the task to waiting.
        owner: New owner

    Returns:
        Dict with task_id, status, completed and file_path

    Raises:
        TaskNotFoundError: If the task does not exist
        TransitionError: If the status change is refused
        TaskValidationError: If the edited record is invalid
    """
    new_status = parse_enum(TaskStatus, status, "status")
    new_priority = parse_enum(TaskPriority, priority, "priority")
    if waiting_on is not None:
        if new_status is None:
            new_status = TaskStatus.WAITING
        elif new_status is not TaskStatus.WAITING:
            raise InvalidRequestError("waiting_on can only be set together with status 'waiting'")

    stored = storage.load(task_id)
    task = stored.task
    if title is not None:
        task.title = title
    if description is not None:
        task.description = description
    if new_priority is not None:
        task.priority = new_priority
    if priority_value is not None:
        task.priority_value = priority_value
    if tags is not None:
        task.tags = list(tags) or None
    if owner is not None:
        task.owner = owner
    if new_status is not None:
        result = transition(
            task,
            new_status,
            waiting_on=waiting_on,
            status_of=storage.status_of,
        )
        if result.changed:
            logger.info("Task %s: %s -> %s", task_id, result.from_status.value, result.to_status.value)

    storage.save(stored)
    return {
        "task_id": task_id,
        "status": task.status.value,
        "completed": stored.to_dict()["completed"],
        "file_path": str(stored.path),
    }


def complete_task(storage: TaskStorage, task_id: str) -> dict[str, Any]:
    return update_task(storage, task_id, status=TaskStatus.DONE)


def sync_store(storage: TaskStorage) -> dict[str, Any]:
    return TaskSyncService(storage).sync().to_dict()


def _query_tasks(storage: TaskStorage, query: TaskQuery, sync: bool | None) -> list[StoredTask]:
    if storage.config.sync_before_query if sync is None else sync:
        TaskSyncService(storage).sync()
    return [stored for stored in storage.list_tasks() if query.matches(stored)]


def find_tasks(
    storage: TaskStorage,
    query: TaskQuery | None = None,
    fields: list[str] | None = None,
    *,
    sync: bool | None = None,
) -> list[dict[str, Any]]:
    """Tasks matching ``query``, in store order.

    Args:
        storage: Task store
        query: Filters; all tasks when omitted
        fields: Fields to include per task. Defaults to id, status, title.
        sync: Reconcile the store first. Defaults to the store's
            ``sync_before_query`` setting.
    """
    selection = TaskFields.parse(fields)
    matched = _query_tasks(storage, query or TaskQuery(), sync)
    return [selection.select(stored) for stored in matched]


def pick_tasks(
    storage: TaskStorage,
    query: TaskQuery | None = None,
    fields: list[str] | None = None,
    *,
    limit: int | None = None,
    sync: bool | None = None,
) -> list[dict[str, Any]]:
    """Todo tasks, most pressing first.

    Ordered by priority (urgent first), then priority_value (highest
    first), then id.
    """
    selection = TaskFields.parse(fields or ["id", "priority", "priority_value", "title"])
    query = replace(query or TaskQuery(), status=TaskStatus.TODO)
    matched = _query_tasks(storage, query, sync)
    matched.sort(key=lambda s: (-s.task.priority.rank, -s.task.priority_value, s.task_id))
    if limit is not None:
        matched = matched[:limit]
    return [selection.select(stored) for stored in matched]
