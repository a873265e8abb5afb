#!/usr/bin/env python3
"""Task Sync: reconcile the store's directories with its task files.

The status written in a task file is authoritative. A sync pass:
1. Reads every task file (in parallel) and classifies it
2. Resolves waiting_on references: references to missing tasks and to
   tasks that end up done or cancelled are dropped
3. Releases tasks with no remaining dependencies to todo, and moves tasks
   that gained unresolved dependencies to waiting
4. Writes changed files, then moves each task directory into the status
   directory its file declares

Running sync again on an unchanged store reports nothing.

Usage:
    from tasktree.task_sync import TaskSyncService

    report = TaskSyncService(storage).sync()
    print(report.to_dict())
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from tasktree.errors import (
    CompletedMissing,
    CompletedNotAllowed,
    FrontmatterError,
    StoreNotFoundError,
    TaskIOError,
    TaskValidationError,
    WaitingFoundButAllValid,
    WaitingOnMissing,
)
from tasktree.task_id import parse_reference
from tasktree.task_model import Task, TaskStatus
from tasktree.task_storage import StoredTask, TaskStorage
from tasktree.task_validation import check_task, transition

logger = logging.getLogger(__name__)

# Validation failures the sync pass repairs rather than skips
REPAIRABLE = (WaitingFoundButAllValid, WaitingOnMissing, CompletedMissing, CompletedNotAllowed)


class DependencyChange(Enum):
    RESOLVED = "resolved"  # dependency is done or cancelled
    MISSING = "missing"  # dependency does not exist


@dataclass
class Transition:
    """A task whose status or location changed."""

    task_id: str
    from_status: TaskStatus
    to_status: TaskStatus

    def to_dict(self) -> dict[str, Any]:
        return {"task_id": self.task_id, "from": self.from_status.value, "to": self.to_status.value}


@dataclass
class DependencyUpdate:
    """A waiting_on reference dropped from a task."""

    task_id: str
    change: DependencyChange
    dependency: str

    def to_dict(self) -> dict[str, Any]:
        return {"task_id": self.task_id, "change": self.change.value, "dependency": self.dependency}


@dataclass
class SyncFailure:
    task_id: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"task_id": self.task_id, "message": self.message}


@dataclass
class SyncReport:
    """Summary report of a sync pass."""

    transitions: list[Transition] = field(default_factory=list)
    updates: list[DependencyUpdate] = field(default_factory=list)
    failures: list[SyncFailure] = field(default_factory=list)
    scanned: int = 0

    @property
    def count(self) -> int:
        """Number of distinct tasks changed."""
        changed = {t.task_id for t in self.transitions} | {u.task_id for u in self.updates}
        return len(changed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "transitions": [t.to_dict() for t in self.transitions],
            "updates": [u.to_dict() for u in self.updates],
            "count": self.count,
            "failures": [f.to_dict() for f in self.failures],
            "scanned": self.scanned,
        }


@dataclass
class _Entry:
    """Classification of one task directory."""

    task_id: str
    folder: TaskStatus
    path: Path
    task: Task | None = None
    problem: str | None = None


@dataclass
class _Plan:
    """What sync will do to one task."""

    entry: _Entry
    final_status: TaskStatus
    task: Task | None = None
    dropped: list[tuple[str, DependencyChange]] = field(default_factory=list)

    @property
    def needs_write(self) -> bool:
        return self.task is not None and self.task != self.entry.task

    @property
    def needs_move(self) -> bool:
        return self.task is not None and self.final_status is not self.entry.folder

    def transition(self) -> Transition | None:
        declared = self.entry.task.status
        if self.final_status is declared and self.final_status is self.entry.folder:
            return None
        source = declared if declared is not self.final_status else self.entry.folder
        return Transition(self.entry.task_id, source, self.final_status)


class TaskSyncService:
    """Reconciles task directories with the statuses their files declare."""

    def __init__(self, storage: TaskStorage, workers: int | None = None):
        """Initialize task sync service.

        Args:
            storage: Store to reconcile
            workers: Threads used to read task files. Defaults to the
                store's ``sync_workers`` setting.
        """
        self.storage = storage
        self.workers = workers or storage.config.sync_workers

    def sync(self) -> SyncReport:
        """Run one reconciliation pass over the whole store.

        Problems with individual tasks are logged and reported; they never
        stop the pass.

        Raises:
            StoreNotFoundError: If the store root does not exist
        """
        if not self.storage.root.is_dir():
            raise StoreNotFoundError(f"Task store not found: {self.storage.root}")

        entries = self._classify()
        report = SyncReport(scanned=len(entries))
        plans = self._plan(entries)
        for plan in plans:
            self._apply(plan, report)

        logger.info(
            "Sync scanned %d tasks: %d transitions, %d dependency updates, %d failures",
            report.scanned,
            len(report.transitions),
            len(report.updates),
            len(report.failures),
        )
        return report

    # -------------------------------------------------------------------------
    # Phase 1: classify
    # -------------------------------------------------------------------------

    def _read(self, location: tuple[TaskStatus, str, Path]) -> _Entry:
        folder, task_id, path = location
        entry = _Entry(task_id, folder, path)
        try:
            task = self.storage.read_task(path)
        except (FrontmatterError, TaskIOError) as e:
            entry.problem = str(e)
            return entry

        error = check_task(task)
        if error is not None and not isinstance(error, REPAIRABLE):
            entry.problem = f"{path}: {error}"
            return entry
        entry.task = task
        return entry

    def _classify(self) -> list[_Entry]:
        locations = list(self.storage.iter_task_dirs())
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            entries = list(pool.map(self._read, locations))
        for entry in entries:
            if entry.problem:
                logger.warning("Skipping task %s: %s", entry.task_id, entry.problem)
        return entries

    # -------------------------------------------------------------------------
    # Phase 2: plan
    # -------------------------------------------------------------------------

    def _plan(self, entries: list[_Entry]) -> list[_Plan]:
        by_id: dict[str, _Entry] = {}
        for entry in entries:
            if entry.task_id in by_id:
                logger.warning(
                    "Task %s is in both %s and %s; ignoring the copy in %s",
                    entry.task_id,
                    by_id[entry.task_id].folder.value,
                    entry.folder.value,
                    entry.folder.value,
                )
                continue
            by_id[entry.task_id] = entry

        plans: dict[str, _Plan] = {}
        visiting: set[str] = set()

        def final_status(task_id: str) -> TaskStatus:
            if task_id in visiting:
                # Dependency cycle: treat as unfinished
                return TaskStatus.WAITING
            return plan_for(by_id[task_id]).final_status

        def plan_for(entry: _Entry) -> _Plan:
            if entry.task_id not in plans:
                visiting.add(entry.task_id)
                try:
                    plans[entry.task_id] = self._plan_task(entry, by_id, final_status)
                finally:
                    visiting.discard(entry.task_id)
            return plans[entry.task_id]

        return [plan_for(entry) for entry in by_id.values()]

    def _plan_task(
        self,
        entry: _Entry,
        by_id: dict[str, _Entry],
        final_status: Callable[[str], TaskStatus],
    ) -> _Plan:
        if entry.task is None:
            return _Plan(entry, entry.folder)

        task = copy.deepcopy(entry.task)
        declared = task.status
        plan = _Plan(entry, declared, task)

        if task.waiting_on:
            remaining = []
            for item in task.waiting_on:
                dependency = parse_reference(item)
                if dependency not in by_id:
                    logger.warning("Task %s waits on missing task %s; dropping it", entry.task_id, dependency)
                    plan.dropped.append((dependency, DependencyChange.MISSING))
                elif final_status(dependency).is_finished:
                    logger.info("Task %s no longer waits on finished task %s", entry.task_id, dependency)
                    plan.dropped.append((dependency, DependencyChange.RESOLVED))
                else:
                    remaining.append(item)

            if remaining:
                task.waiting_on = remaining
                transition(task, TaskStatus.WAITING)
            else:
                task.waiting_on = None
                transition(task, TaskStatus.TODO)
        elif declared is TaskStatus.WAITING:
            # Nothing to wait on: fall back to where the task was filed
            target = entry.folder if entry.folder is not TaskStatus.WAITING else TaskStatus.TODO
            logger.warning(
                "Task %s is waiting on nothing; moving it to %s", entry.task_id, target.value
            )
            transition(task, target)
        else:
            # Re-entering the declared status fixes a stray or missing completed
            transition(task, declared)

        plan.final_status = task.status
        return plan

    # -------------------------------------------------------------------------
    # Phase 3: apply
    # -------------------------------------------------------------------------

    def _apply(self, plan: _Plan, report: SyncReport) -> None:
        if not plan.needs_write and not plan.needs_move:
            return

        entry = plan.entry
        stored = StoredTask(entry.task_id, plan.task, entry.folder, entry.path)
        try:
            if plan.needs_write:
                self.storage.write(stored)
            report.updates.extend(
                DependencyUpdate(entry.task_id, change, dependency)
                for dependency, change in plan.dropped
            )
            if plan.needs_move:
                self.storage.move(entry.task_id, entry.folder, plan.final_status)
        except (TaskIOError, TaskValidationError) as e:
            logger.warning("Could not update task %s: %s", entry.task_id, e)
            report.failures.append(SyncFailure(entry.task_id, str(e)))
            return

        change = plan.transition()
        if change is not None:
            report.transitions.append(change)
