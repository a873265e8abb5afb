#!/usr/bin/env python3
"""FastMCP server exposing the task store.

Tools: create_task, get_task, update_task, find_tasks, pick_tasks,
sync_tasks. Every tool returns ``{"success": True, ...}`` or
``{"success": False, "error": <code>, "message": ...}`` where ``code`` is
the ``code`` of the tasktree error that occurred.

The store is located per call (``$TASKTREE_DIR`` or the nearest
``.tasktree`` above the working directory). The session ends when the
client closes stdin.

Usage:
    # Development
    fastmcp dev tasktree/mcp_servers/tasks_server.py

    # Production (stdio)
    tasktree server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP

from tasktree import operations
from tasktree.errors import TaskTreeError
from tasktree.operations import ListFilter, TaskQuery, parse_enum
from tasktree.task_model import TaskPriority, TaskStatus
from tasktree.task_storage import TaskStorage

logger = logging.getLogger(__name__)

mcp = FastMCP("tasktree")


def _get_storage() -> TaskStorage:
    return TaskStorage.discover()


def _error_response(action: str, error: Exception) -> dict[str, Any]:
    if isinstance(error, TaskTreeError):
        logger.warning("%s failed: %s", action, error)
        return {"success": False, "error": error.code, "message": str(error)}
    logger.exception("%s failed", action)
    return {"success": False, "error": "internal_error", "message": f"Failed to {action}: {error}"}


def _run(action: str, call: Callable[[TaskStorage], dict[str, Any]]) -> dict[str, Any]:
    """Run one tool call against the store and wrap the outcome."""
    try:
        result = call(_get_storage())
    except Exception as e:
        return _error_response(action, e)
    return {"success": True, **result}


def _query(
    status: str | None,
    priority: str | None,
    owner: str | None,
    tags: str | None,
    waiting_on: str | None,
) -> TaskQuery:
    return TaskQuery(
        status=parse_enum(TaskStatus, status, "status"),
        priority=parse_enum(TaskPriority, priority, "priority"),
        owner=owner,
        tags=ListFilter.parse(tags) if tags else None,
        waiting_on=ListFilter.parse(waiting_on) if waiting_on else None,
    )


@mcp.tool()
def create_task(
    title: str,
    description: str = "",
    priority: str | None = None,
    priority_value: int | None = None,
    tags: list[str] | None = None,
    waiting_on: list[str] | None = None,
    owner: str | None = None,
) -> dict[str, Any]:
    """Create a new task.

    Args:
        title: Task title (single line, required)
        description: Markdown body
        priority: low, medium, high or urgent (default from store config)
        priority_value: Ordering within the priority, 0-255
        tags: Tags to attach
        waiting_on: Task ids this task depends on; the task starts waiting
        owner: Owner (default from store config or $USER)

    Returns:
        Dictionary with:
        - success: True if created
        - task_id: New task id
        - status: todo or waiting
        - file_path: Path of the task file
        - message: Status message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        result = operations.create_task(
            storage,
            title,
            description=description,
            priority=priority,
            priority_value=priority_value,
            tags=tags,
            waiting_on=waiting_on,
            owner=owner,
        )
        return {**result, "message": f"Created task {result['task_id']}"}

    return _run("create task", call)


@mcp.tool()
def get_task(id: str) -> dict[str, Any]:
    """Get a task by id.

    Args:
        id: Task id (e.g. "quiet_gecko_7hx")

    Returns:
        Dictionary with success, task (all fields) and message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        task = operations.get_task(storage, id)
        return {"task": task, "message": f"Found task: {task['title']}"}

    return _run("get task", call)


@mcp.tool()
def update_task(
    id: str,
    status: str | None = None,
    title: str | None = None,
    description: str | None = None,
    priority: str | None = None,
    priority_value: int | None = None,
    tags: list[str] | None = None,
    waiting_on: list[str] | None = None,
    owner: str | None = None,
) -> dict[str, Any]:
    """Update a task's fields and status.

    A status change moves the task directory. Leaving waiting requires all
    dependencies to be done or cancelled; done and cancelled cannot be
    swapped directly.

    Args:
        id: Task id
        status: todo, started, done, cancelled or waiting
        title: New title
        description: New markdown body
        priority: New priority
        priority_value: New ordering value, 0-255
        tags: Replacement tags (empty list removes them)
        waiting_on: Replacement dependency ids (sets status to waiting)
        owner: New owner

    Returns:
        Dictionary with success, task_id, status, completed, file_path and message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        result = operations.update_task(
            storage,
            id,
            status=status,
            title=title,
            description=description,
            priority=priority,
            priority_value=priority_value,
            tags=tags,
            waiting_on=waiting_on,
            owner=owner,
        )
        return {**result, "message": f"Updated task {id} ({result['status']})"}

    return _run("update task", call)


@mcp.tool()
def find_tasks(
    status: str | None = None,
    priority: str | None = None,
    owner: str | None = None,
    tags: str | None = None,
    waiting_on: str | None = None,
    fields: list[str] | None = None,
) -> dict[str, Any]:
    """Find tasks matching every given filter.

    Args:
        status: Only tasks with this status
        priority: Only tasks with this priority
        owner: Only tasks with this owner
        tags: "a,b" or "or:a,b" (any tag) or "and:a,b" (all tags)
        waiting_on: Dependency ids, same syntax as tags
        fields: Fields to return per task (default id, status, title)

    Returns:
        Dictionary with success, tasks, count and message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        query = _query(status, priority, owner, tags, waiting_on)
        tasks = operations.find_tasks(storage, query, fields)
        return {"tasks": tasks, "count": len(tasks), "message": f"Found {len(tasks)} tasks"}

    return _run("find tasks", call)


@mcp.tool()
def pick_tasks(
    priority: str | None = None,
    owner: str | None = None,
    tags: str | None = None,
    limit: int | None = None,
    fields: list[str] | None = None,
) -> dict[str, Any]:
    """List todo tasks, most pressing first (priority, then priority_value).

    Args:
        priority: Only tasks with this priority
        owner: Only tasks with this owner
        tags: "a,b" or "or:a,b" or "and:a,b"
        limit: Maximum number of tasks
        fields: Fields to return per task

    Returns:
        Dictionary with success, tasks, count and message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        query = _query(None, priority, owner, tags, None)
        tasks = operations.pick_tasks(storage, query, fields, limit=limit)
        return {"tasks": tasks, "count": len(tasks), "message": f"Picked {len(tasks)} tasks"}

    return _run("pick tasks", call)


@mcp.tool()
def sync_tasks() -> dict[str, Any]:
    """Reconcile task directories with the statuses in their files.

    Returns:
        Dictionary with success, transitions, updates, count, failures,
        scanned and message
    """

    def call(storage: TaskStorage) -> dict[str, Any]:
        report = operations.sync_store(storage)
        return {**report, "message": f"Synced {report['count']} of {report['scanned']} tasks"}

    return _run("sync tasks", call)


def main() -> None:
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    mcp.run()


if __name__ == "__main__":
    main()
