"""Tests for the request layer shared by the CLI and the MCP server."""

import pytest

from tasktree import operations
from tasktree.config import TaskTreeConfig
from tasktree.errors import (
    InvalidPriorityValue,
    InvalidRequestError,
    ShouldBeDone,
    ShouldBeWaiting,
    TaskNotFoundError,
)
from tasktree.operations import ListFilter, MatchMode, TaskQuery
from tasktree.task_model import TaskPriority, TaskStatus
from tasktree.task_storage import TaskStorage


def test_create_and_get(storage) -> None:
    created = operations.create_task(
        storage, "Write docs", priority="high", priority_value=70, tags=["docs"]
    )
    assert created["status"] == "todo"

    task = operations.get_task(storage, created["task_id"])
    assert task["id"] == created["task_id"]
    assert task["title"] == "Write docs"
    assert task["priority"] == "high"
    assert task["priority_value"] == 70
    assert task["tags"] == ["docs"]
    assert task["owner"] == "tester"
    assert task["file_path"] == created["file_path"]


def test_create_with_dependencies_is_waiting(storage) -> None:
    created = operations.create_task(storage, "Later", waiting_on=["abc_def_123"])
    assert created["status"] == "waiting"
    assert operations.get_task(storage, created["task_id"])["waiting_on"] == ["abc_def_123"]


def test_create_rejects_unknown_priority(storage) -> None:
    with pytest.raises(InvalidRequestError):
        operations.create_task(storage, "Bad", priority="URGENT")


def test_get_missing_task(storage) -> None:
    with pytest.raises(TaskNotFoundError):
        operations.get_task(storage, "abc_def_123")


def test_update_fields(storage) -> None:
    task_id = operations.create_task(storage, "Draft", tags=["a"])["task_id"]

    operations.update_task(
        storage,
        task_id,
        title="Final",
        description="Body\n",
        priority="urgent",
        priority_value=99,
        tags=[],
        owner="robin",
    )

    task = operations.get_task(storage, task_id)
    assert task["title"] == "Final"
    assert task["description"] == "Body\n"
    assert task["priority"] == "urgent"
    assert task["priority_value"] == 99
    assert task["tags"] is None
    assert task["owner"] == "robin"


def test_update_rejects_invalid_record_without_writing(storage) -> None:
    task_id = operations.create_task(storage, "Draft")["task_id"]
    with pytest.raises(InvalidPriorityValue):
        operations.update_task(storage, task_id, priority_value=300)
    assert operations.get_task(storage, task_id)["priority_value"] == 50


def test_complete_moves_task_to_done(storage) -> None:
    task_id = operations.create_task(storage, "Finish")["task_id"]

    result = operations.complete_task(storage, task_id)

    assert result["status"] == "done"
    assert result["completed"] is not None
    assert storage.load(task_id).folder is TaskStatus.DONE


def test_done_cannot_become_cancelled(storage) -> None:
    task_id = operations.create_task(storage, "Finish")["task_id"]
    operations.complete_task(storage, task_id)
    with pytest.raises(ShouldBeDone):
        operations.update_task(storage, task_id, status="cancelled")
    assert storage.load(task_id).folder is TaskStatus.DONE


def test_waiting_lifecycle(storage) -> None:
    blocker = operations.create_task(storage, "Blocker")["task_id"]
    task_id = operations.create_task(storage, "Blocked")["task_id"]

    result = operations.update_task(storage, task_id, waiting_on=[blocker])
    assert result["status"] == "waiting"
    assert storage.load(task_id).folder is TaskStatus.WAITING

    with pytest.raises(ShouldBeWaiting):
        operations.update_task(storage, task_id, status="todo")

    operations.complete_task(storage, blocker)
    result = operations.update_task(storage, task_id, status="todo")
    assert result["status"] == "todo"
    assert operations.get_task(storage, task_id)["waiting_on"] is None


def test_waiting_on_with_other_status_is_rejected(storage) -> None:
    task_id = operations.create_task(storage, "Draft")["task_id"]
    with pytest.raises(InvalidRequestError):
        operations.update_task(storage, task_id, status="done", waiting_on=["abc_def_123"])


def test_update_rejects_unknown_status(storage) -> None:
    task_id = operations.create_task(storage, "Draft")["task_id"]
    with pytest.raises(InvalidRequestError):
        operations.update_task(storage, task_id, status="Done")


@pytest.mark.parametrize(
    ("text", "values", "mode"),
    [
        ("a,b", ["a", "b"], MatchMode.OR),
        ("or:a", ["a"], MatchMode.OR),
        ("and:a, b", ["a", "b"], MatchMode.AND),
    ],
)
def test_list_filter_parse(text, values, mode) -> None:
    assert ListFilter.parse(text) == ListFilter(values, mode)


def test_list_filter_rejects_empty() -> None:
    with pytest.raises(InvalidRequestError):
        ListFilter.parse("and:")


def test_find_filters(storage, make_task_file) -> None:
    make_task_file("todo", "abc_def_123", tags=["docs", "release"], priority="high")
    make_task_file("todo", "bcd_efg_234", tags=["docs"])
    make_task_file("started", "cde_fgh_345", tags=["ops"])
    make_task_file("waiting", "def_ghj_456", waiting_on=["abc_def_123"])

    def ids(query: TaskQuery) -> list[str]:
        return [row["id"] for row in operations.find_tasks(storage, query)]

    assert ids(TaskQuery()) == ["abc_def_123", "bcd_efg_234", "cde_fgh_345", "def_ghj_456"]
    assert ids(TaskQuery(status=TaskStatus.TODO)) == ["abc_def_123", "bcd_efg_234"]
    assert ids(TaskQuery(priority=TaskPriority.HIGH)) == ["abc_def_123"]
    assert ids(TaskQuery(tags=ListFilter.parse("docs,ops"))) == [
        "abc_def_123",
        "bcd_efg_234",
        "cde_fgh_345",
    ]
    assert ids(TaskQuery(tags=ListFilter.parse("and:docs,release"))) == ["abc_def_123"]
    assert ids(TaskQuery(waiting_on=ListFilter.parse("abc_def_123"))) == ["def_ghj_456"]
    assert ids(TaskQuery(owner="nobody")) == []


def test_find_selects_fields(storage, make_task_file) -> None:
    make_task_file("todo", "abc_def_123")
    rows = operations.find_tasks(storage, fields=["id", "priority_value", "file_path"])
    assert rows == [
        {
            "id": "abc_def_123",
            "priority_value": 50,
            "file_path": str(storage.root / "todo" / "abc_def_123" / "abc_def_123.md"),
        }
    ]

    with pytest.raises(InvalidRequestError):
        operations.find_tasks(storage, fields=["id", "colour"])


def test_find_syncs_first_when_configured(store_root, make_task_file) -> None:
    make_task_file("todo", "abc_def_123", status="started")
    storage = TaskStorage(store_root, TaskTreeConfig(default_owner="tester", sync_before_query=True))

    rows = operations.find_tasks(storage, TaskQuery(status=TaskStatus.STARTED), ["id", "file_path"])

    assert rows[0]["file_path"].endswith("started/abc_def_123/abc_def_123.md")


def test_pick_orders_by_priority_then_value(storage, make_task_file) -> None:
    make_task_file("todo", "abc_def_123", priority="low", priority_value=200)
    make_task_file("todo", "bcd_efg_234", priority="urgent", priority_value=1)
    make_task_file("todo", "cde_fgh_345", priority="high", priority_value=10)
    make_task_file("todo", "def_ghj_456", priority="high", priority_value=90)
    make_task_file("started", "efg_hjk_567", priority="urgent", priority_value=255)

    rows = operations.pick_tasks(storage)

    assert [row["id"] for row in rows] == [
        "bcd_efg_234",
        "def_ghj_456",
        "cde_fgh_345",
        "abc_def_123",
    ]
    assert set(rows[0]) == {"id", "priority", "priority_value", "title"}
    assert [row["id"] for row in operations.pick_tasks(storage, limit=1)] == ["bcd_efg_234"]


def test_pick_leaves_the_callers_query_alone(storage, make_task_file) -> None:
    make_task_file("todo", "abc_def_123", priority="high")
    make_task_file("done", "bcd_efg_234", priority="high", completed="2026-01-06T08:00:00Z")
    query = TaskQuery(status=TaskStatus.DONE, priority=TaskPriority.HIGH)

    rows = operations.pick_tasks(storage, query)

    assert [row["id"] for row in rows] == ["abc_def_123"], "pick only ever returns todo tasks"
    assert query.status is TaskStatus.DONE, "query must not be modified"
    assert [row["id"] for row in operations.find_tasks(storage, query)] == ["bcd_efg_234"]


def test_sync_store_returns_report(storage, make_task_file) -> None:
    make_task_file("todo", "abc_def_123", status="started")
    report = operations.sync_store(storage)
    assert report["transitions"] == [{"task_id": "abc_def_123", "from": "todo", "to": "started"}]
