#!/usr/bin/env python3
"""Task record model.

A task is a markdown file with a ``---`` delimited header of ``name: value``
lines followed by a free-form description. ``Task`` is the in-memory form of
one such file. The identifier is not part of the record: it is the name of
the directory holding the file.

``FIELD_TABLE`` lists the known header fields in the order they are written
back out. The parser and serializer in ``tasktree.frontmatter`` are both
driven by it.

Usage:
    from tasktree.task_model import Task, TaskStatus

    task = Task.new("Write the release notes", owner="sam")
    task.status is TaskStatus.TODO
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from tasktree.task_id import format_reference, parse_reference

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")

PRIORITY_VALUE_MAX = 255


class TaskStatus(Enum):
    """Task lifecycle states. Each one is also a top-level store directory."""

    TODO = "todo"
    STARTED = "started"
    DONE = "done"
    CANCELLED = "cancelled"
    WAITING = "waiting"

    @property
    def is_finished(self) -> bool:
        return self in FINISHED_STATUSES


FINISHED_STATUSES = frozenset({TaskStatus.DONE, TaskStatus.CANCELLED})

# Directory scan order for the store; waiting comes last
STATUS_ORDER = (
    TaskStatus.TODO,
    TaskStatus.STARTED,
    TaskStatus.DONE,
    TaskStatus.CANCELLED,
    TaskStatus.WAITING,
)


class TaskPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Higher is more pressing."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
    TaskPriority.URGENT: 3,
}


class FieldKind(Enum):
    TEXT = "text"
    UINT8 = "uint8"
    STATUS = "status"
    PRIORITY = "priority"
    TIMESTAMP = "timestamp"
    LIST = "list"


@dataclass(frozen=True)
class FieldSpec:
    """One known header field."""

    name: str
    kind: FieldKind
    required: bool

    @property
    def is_list(self) -> bool:
        return self.kind is FieldKind.LIST


# Serialization order. The lists sit before the required ``created`` scalar,
# so a list is always followed by a line that cannot be read as an item.
FIELD_TABLE: tuple[FieldSpec, ...] = (
    FieldSpec("title", FieldKind.TEXT, required=True),
    FieldSpec("status", FieldKind.STATUS, required=True),
    FieldSpec("priority", FieldKind.PRIORITY, required=True),
    FieldSpec("priority_value", FieldKind.UINT8, required=True),
    FieldSpec("owner", FieldKind.TEXT, required=True),
    FieldSpec("tags", FieldKind.LIST, required=False),
    FieldSpec("waiting_on", FieldKind.LIST, required=False),
    FieldSpec("created", FieldKind.TIMESTAMP, required=True),
    FieldSpec("completed", FieldKind.TIMESTAMP, required=False),
)

FIELDS_BY_NAME = {field_def.name: field_def for field_def in FIELD_TABLE}


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse ``YYYY-MM-DDTHH:MM:SSZ`` into an aware UTC datetime.

    Raises:
        ValueError: If the text is not in that exact form or names an
            impossible calendar time.
    """
    if not _TIMESTAMP_PATTERN.match(text):
        raise ValueError(f"expected YYYY-MM-DDTHH:MM:SSZ, got {text!r}")
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=UTC)


@dataclass
class Task:
    """In-memory form of a task file.

    ``waiting_on`` holds quoted references (``"[[taskid]]"``) exactly as they
    appear in the file. ``extension_lines`` holds header lines that matched
    no known field, in their original order.
    """

    title: str
    status: TaskStatus
    priority: TaskPriority
    priority_value: int
    owner: str
    created: datetime
    completed: datetime | None = None
    waiting_on: list[str] | None = None
    tags: list[str] | None = None
    description: str = ""
    extension_lines: list[str] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        title: str,
        owner: str,
        *,
        priority: TaskPriority = TaskPriority.MEDIUM,
        priority_value: int = 50,
        tags: list[str] | None = None,
        waiting_on: list[str] | None = None,
        description: str = "",
    ) -> Task:
        """Build a fresh record.

        Args:
            title: Task title
            owner: Task owner
            priority: Priority bucket
            priority_value: Ordering within the bucket (0-255)
            tags: Optional tags
            waiting_on: Bare ids of tasks this one depends on. When given,
                the task starts out waiting instead of todo.
            description: Markdown body

        Returns:
            Unvalidated Task
        """
        references = [format_reference(task_id) for task_id in waiting_on or []]
        return cls(
            title=title,
            status=TaskStatus.WAITING if references else TaskStatus.TODO,
            priority=priority,
            priority_value=priority_value,
            owner=owner,
            created=utc_now(),
            waiting_on=references or None,
            tags=list(tags) if tags else None,
            description=description,
        )

    def dependency_ids(self) -> list[str]:
        """Bare ids referenced by waiting_on, skipping malformed entries."""
        ids = []
        for item in self.waiting_on or []:
            task_id = parse_reference(item)
            if task_id is None:
                logger.debug("Ignoring malformed waiting_on entry %r", item)
                continue
            ids.append(task_id)
        return ids

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "priority_value": self.priority_value,
            "owner": self.owner,
            "created": format_timestamp(self.created),
            "completed": format_timestamp(self.completed) if self.completed else None,
            "waiting_on": self.dependency_ids() if self.waiting_on else None,
            "tags": list(self.tags) if self.tags else None,
            "description": self.description,
        }
