"""Shared fixtures: throwaway task stores under tmp_path."""

from pathlib import Path

import pytest

from tasktree.config import TaskTreeConfig
from tasktree.paths import STORE_ENV_VAR
from tasktree.task_storage import TaskStorage, init_store

CREATED = "2026-01-05T10:00:00Z"


@pytest.fixture(autouse=True)
def _no_store_env(monkeypatch):
    """Keep a developer's $TASKTREE_DIR out of the tests."""
    monkeypatch.delenv(STORE_ENV_VAR, raising=False)


@pytest.fixture
def store_root(tmp_path) -> Path:
    return init_store(tmp_path)


@pytest.fixture
def storage(store_root) -> TaskStorage:
    return TaskStorage(
        store_root,
        TaskTreeConfig(default_owner="tester", sync_workers=2, sync_before_query=False),
    )


@pytest.fixture
def make_task_file(store_root):
    """Write a task file directly, bypassing validation.

    Returns a function ``make(folder, task_id, status=None, waiting_on=None,
    completed=None, title="Task", description="")`` that returns the path.
    """

    def make(
        folder: str,
        task_id: str,
        *,
        status: str | None = None,
        waiting_on: list[str] | None = None,
        completed: str | None = None,
        title: str = "Task",
        tags: list[str] | None = None,
        priority: str = "medium",
        priority_value: int = 50,
        description: str = "",
    ) -> Path:
        lines = [
            "---",
            f"title: {title}",
            f"status: {status or folder}",
            f"priority: {priority}",
            f"priority_value: {priority_value}",
            "owner: tester",
        ]
        if tags:
            lines.append("tags:")
            lines.extend(f"- {tag}" for tag in tags)
        if waiting_on:
            lines.append("waiting_on:")
            lines.extend(f'- "[[{dep}]]"' for dep in waiting_on)
        lines.append(f"created: {CREATED}")
        if completed:
            lines.append(f"completed: {completed}")
        lines.append("---")
        path = store_root / folder / task_id / f"{task_id}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n" + description, encoding="utf-8")
        return path

    return make
