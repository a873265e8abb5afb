#!/usr/bin/env python3
"""Task storage: one directory per task, grouped by status.

Directory Structure:
    <store>/
    ├── config.yaml
    ├── .locks/                    (one lock per status directory, for moves)
    ├── todo/
    │   └── quiet_gecko_7hx/
    │       ├── quiet_gecko_7hx.md
    │       ├── quiet_gecko_7hx.md.lock
    │       └── notes.txt          (moves with the task)
    ├── waiting/
    │   └── ...
    └── done/
        └── ...

Status directories are created on demand. The task file is the only
source of truth; the directory a task sits in is reconciled to the file's
status by ``tasktree.task_sync``.

Usage:
    from tasktree.task_storage import TaskStorage

    storage = TaskStorage.discover()
    stored = storage.create_task("Write the release notes")
    loaded = storage.load(stored.task_id)
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from tasktree.config import TaskTreeConfig, load_config
from tasktree.errors import (
    FrontmatterError,
    InvalidTaskIdError,
    TaskExistsError,
    TaskIOError,
    TaskNotFoundError,
)
from tasktree.frontmatter import parse_task, serialize_task
from tasktree.paths import (
    STORE_DIR_NAME,
    TASK_FILE_SUFFIX,
    config_path,
    find_store_root,
    lock_path,
    status_dir,
    task_dir,
    task_file,
)
from tasktree.task_id import TaskIdGenerator, validate
from tasktree.task_model import STATUS_ORDER, Task, TaskPriority, TaskStatus
from tasktree.task_validation import validate_task

logger = logging.getLogger(__name__)

LOCK_TIMEOUT = 10


@dataclass
class StoredTask:
    """A task together with where it currently lives."""

    task_id: str
    task: Task
    folder: TaskStatus
    path: Path

    @property
    def misplaced(self) -> bool:
        return self.task.status is not self.folder

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.task_id, **self.task.to_dict(), "file_path": str(self.path)}


def init_store(directory: Path, *, bare: bool = False) -> Path:
    """Create a store in ``directory`` unless one already exists.

    Args:
        directory: Directory that will hold ``.tasktree``
        bare: Skip writing a default config.yaml

    Returns:
        Path to the store root
    """
    root = directory.resolve() / STORE_DIR_NAME
    try:
        root.mkdir(parents=True, exist_ok=True)
        config_file = config_path(root)
        if not bare and not config_file.exists():
            config_file.write_text(TaskTreeConfig().to_yaml(), encoding="utf-8")
    except OSError as e:
        raise TaskIOError(f"Cannot initialize store at {root}: {e}", root, e) from e
    logger.info("Initialized task store at %s", root)
    return root


class TaskStorage:
    """Reads and writes task directories under one store root."""

    def __init__(
        self,
        root: Path,
        config: TaskTreeConfig | None = None,
        id_generator: TaskIdGenerator | None = None,
    ):
        """Initialize task storage.

        Args:
            root: Store root (the ``.tasktree`` directory)
            config: Store settings. Loaded from the store when omitted.
            id_generator: Source of new ids. A fresh generator by default.
        """
        self.root = root
        self.config = config or load_config(root)
        self.id_generator = id_generator or TaskIdGenerator()

    @classmethod
    def discover(cls, start: Path | None = None) -> TaskStorage:
        return cls(find_store_root(start))

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def iter_task_dirs(self) -> Iterator[tuple[TaskStatus, str, Path]]:
        """Yield (status directory, task id, task file) for every task.

        Entries that are not directories named with a valid id and holding
        ``<id>.md`` are ignored.
        """
        for status in STATUS_ORDER:
            directory = status_dir(self.root, status)
            if not directory.is_dir():
                continue
            for entry in sorted(directory.iterdir()):
                if not entry.is_dir() or not validate(entry.name).valid:
                    logger.debug("Ignoring %s", entry)
                    continue
                path = entry / f"{entry.name}{TASK_FILE_SUFFIX}"
                if not path.is_file():
                    logger.debug("Ignoring %s: no %s", entry, path.name)
                    continue
                yield status, entry.name, path

    def locate(self, task_id: str) -> tuple[TaskStatus, Path]:
        """Find the status directory and file of a task.

        Raises:
            InvalidTaskIdError: If ``task_id`` is malformed
            TaskNotFoundError: If no status directory holds the task
        """
        check = validate(task_id)
        if not check.valid:
            raise InvalidTaskIdError(task_id, check.reason)

        found = [status for status in STATUS_ORDER if task_file(self.root, status, task_id).is_file()]
        if not found:
            raise TaskNotFoundError(task_id)
        if len(found) > 1:
            logger.warning(
                "Task %s exists in several status directories (%s); using %s",
                task_id,
                ", ".join(s.value for s in found),
                found[0].value,
            )
        return found[0], task_file(self.root, found[0], task_id)

    def read_task(self, path: Path) -> Task:
        """Parse one task file.

        Raises:
            TaskIOError: If the file cannot be read
            FrontmatterError: If the file cannot be parsed, with ``path`` set
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise TaskIOError(f"Cannot read {path}: {e}", path, e) from e
        try:
            return parse_task(data)
        except FrontmatterError as e:
            raise e.with_path(path) from None

    def load(self, task_id: str) -> StoredTask:
        folder, path = self.locate(task_id)
        return StoredTask(task_id, self.read_task(path), folder, path)

    def status_of(self, task_id: str) -> TaskStatus | None:
        """Declared status of a task, or None when it does not exist.

        A task whose file cannot be parsed reports its directory's status.
        """
        try:
            folder, path = self.locate(task_id)
        except (InvalidTaskIdError, TaskNotFoundError):
            return None
        try:
            return self.read_task(path).status
        except (FrontmatterError, TaskIOError) as e:
            logger.warning("Using directory status for unreadable task %s: %s", task_id, e)
            return folder

    def list_tasks(self) -> Iterator[StoredTask]:
        """Yield every readable task; unreadable ones are logged and skipped."""
        for folder, task_id, path in self.iter_task_dirs():
            try:
                task = self.read_task(path)
            except (FrontmatterError, TaskIOError) as e:
                logger.warning("Skipping %s: %s", path, e)
                continue
            yield StoredTask(task_id, task, folder, path)

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def _atomic_write(self, path: Path, content: str) -> bool:
        """Write a file atomically under a lock.

        The lock file sits next to the task file, so it moves and is removed
        together with the task directory. No-op if the file content is
        unchanged.

        Returns:
            True if the file was written

        Raises:
            TaskIOError: If the lock cannot be taken or the write fails
        """
        data = content.encode("utf-8")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            lock = FileLock(path.with_suffix(path.suffix + ".lock"), timeout=LOCK_TIMEOUT)
            with lock:
                if path.exists() and path.read_bytes() == data:
                    return False

                # Temp file in the same directory so the rename stays atomic
                fd, temp_path = tempfile.mkstemp(
                    suffix=".tmp",
                    prefix=path.stem + "_",
                    dir=path.parent,
                )
                try:
                    os.close(fd)
                    temp = Path(temp_path)
                    temp.write_bytes(data)
                    temp.replace(path)
                except BaseException:
                    Path(temp_path).unlink(missing_ok=True)
                    raise
        except Timeout as e:
            raise TaskIOError(f"Timed out waiting for lock on {path}", path, e) from e
        except OSError as e:
            raise TaskIOError(f"Cannot write {path}: {e}", path, e) from e
        return True

    def write(self, stored: StoredTask) -> bool:
        """Validate and write a task in its current directory.

        Returns:
            True if the file changed on disk

        Raises:
            TaskValidationError: If the record is inconsistent
            TaskIOError: If the write fails
        """
        validate_task(stored.task)
        written = self._atomic_write(stored.path, serialize_task(stored.task))
        if written:
            logger.debug("Wrote %s", stored.path)
        return written

    def move(self, task_id: str, from_status: TaskStatus, to_status: TaskStatus) -> Path:
        """Move a whole task directory into another status directory.

        Returns:
            The task file's new path

        Raises:
            TaskExistsError: If the destination is already occupied
            TaskIOError: If the rename fails
        """
        if from_status is to_status:
            return task_file(self.root, to_status, task_id)

        source = task_dir(self.root, from_status, task_id)
        destination = task_dir(self.root, to_status, task_id)
        try:
            lock = FileLock(lock_path(self.root, f"status-{to_status.value}"), timeout=LOCK_TIMEOUT)
            with lock:
                destination.parent.mkdir(parents=True, exist_ok=True)
                if destination.exists():
                    raise TaskExistsError(
                        f"Cannot move {task_id} to {to_status.value}: {destination} already exists",
                        destination,
                    )
                source.rename(destination)
        except Timeout as e:
            raise TaskIOError(f"Timed out waiting for lock on {destination.parent}", destination, e) from e
        except OSError as e:
            raise TaskIOError(f"Cannot move {source} to {destination}: {e}", source, e) from e

        logger.info("Moved %s: %s -> %s", task_id, from_status.value, to_status.value)
        return task_file(self.root, to_status, task_id)

    def save(self, stored: StoredTask) -> StoredTask:
        """Write a task, then move it to the directory matching its status."""
        self.write(stored)
        if stored.misplaced:
            stored.path = self.move(stored.task_id, stored.folder, stored.task.status)
            stored.folder = stored.task.status
        return stored

    def create_task(
        self,
        title: str,
        *,
        description: str = "",
        priority: TaskPriority | None = None,
        priority_value: int | None = None,
        tags: list[str] | None = None,
        waiting_on: list[str] | None = None,
        owner: str | None = None,
    ) -> StoredTask:
        """Create and persist a new task under a freshly generated id.

        Args:
            title: Task title
            description: Markdown body
            priority: Defaults to the store's default priority
            priority_value: Defaults to the store's default priority value
            tags: Optional tags
            waiting_on: Bare ids of dependencies; the task starts out waiting
            owner: Defaults to the configured owner or the current user

        Returns:
            The stored task

        Raises:
            InvalidTaskIdError: If a dependency id is malformed
            TaskValidationError: If the resulting record is invalid
            TaskExistsError: If no free id was found within ``id_retries``
        """
        for dependency in waiting_on or []:
            check = validate(dependency)
            if not check.valid:
                raise InvalidTaskIdError(dependency, check.reason)

        task = Task.new(
            title,
            owner or self.config.owner(),
            priority=priority or self.config.default_priority,
            priority_value=(
                self.config.default_priority_value if priority_value is None else priority_value
            ),
            tags=tags,
            waiting_on=waiting_on,
            description=description,
        )
        validate_task(task)
        content = serialize_task(task)

        for _ in range(self.config.id_retries):
            task_id = self.id_generator.generate()
            if any(task_dir(self.root, status, task_id).exists() for status in TaskStatus):
                logger.debug("Generated id %s is taken, retrying", task_id)
                continue
            directory = task_dir(self.root, task.status, task_id)
            try:
                directory.mkdir(parents=True, exist_ok=False)
            except FileExistsError:
                logger.debug("Generated id %s is taken, retrying", task_id)
                continue
            except OSError as e:
                raise TaskIOError(f"Cannot create {directory}: {e}", directory, e) from e

            path = directory / f"{task_id}{TASK_FILE_SUFFIX}"
            try:
                self._atomic_write(path, content)
            except TaskIOError:
                # Release the id rather than leave an empty directory holding it
                shutil.rmtree(directory, ignore_errors=True)
                raise
            logger.info("Created task %s (%s)", task_id, task.status.value)
            return StoredTask(task_id, task, task.status, path)

        raise TaskExistsError(
            f"No free task id after {self.config.id_retries} attempts", self.root
        )
