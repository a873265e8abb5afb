#!/usr/bin/env python3
"""
Path resolution for task stores.

A store is a ``.tasktree`` directory. Tasks live at::

    <store>/<status>/<taskid>/<taskid>.md

Resolution order for the store root:
- $TASKTREE_DIR, when set (must point at an existing directory)
- the nearest ``.tasktree`` directory walking up from the working directory
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from tasktree.errors import StoreNotFoundError
from tasktree.task_model import TaskStatus

logger = logging.getLogger(__name__)

STORE_DIR_NAME = ".tasktree"
STORE_ENV_VAR = "TASKTREE_DIR"
CONFIG_FILE_NAME = "config.yaml"
LOCKS_DIR_NAME = ".locks"
TASK_FILE_SUFFIX = ".md"


def find_store_root(start: Path | None = None) -> Path:
    """
    Locate the task store.

    Args:
        start: Directory to search upward from. Defaults to the working
            directory. Ignored when $TASKTREE_DIR is set.

    Returns:
        Path: Absolute path to the store directory

    Raises:
        StoreNotFoundError: If $TASKTREE_DIR points nowhere or no store is
            found in ``start`` or any of its parents
    """
    env_dir = os.environ.get(STORE_ENV_VAR)
    if env_dir:
        root = Path(env_dir).expanduser().resolve()
        if not root.is_dir():
            raise StoreNotFoundError(f"${STORE_ENV_VAR} is not a directory: {root}")
        return root

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / STORE_DIR_NAME
        if candidate.is_dir():
            logger.debug("Using task store %s", candidate)
            return candidate

    raise StoreNotFoundError(
        f"No {STORE_DIR_NAME} directory found in {current} or its parents. "
        f"Run 'tasktree init' or set ${STORE_ENV_VAR}."
    )


def status_dir(root: Path, status: TaskStatus) -> Path:
    return root / status.value


def task_dir(root: Path, status: TaskStatus, task_id: str) -> Path:
    return status_dir(root, status) / task_id


def task_file(root: Path, status: TaskStatus, task_id: str) -> Path:
    return task_dir(root, status, task_id) / f"{task_id}{TASK_FILE_SUFFIX}"


def config_path(root: Path) -> Path:
    return root / CONFIG_FILE_NAME


def lock_path(root: Path, name: str) -> Path:
    """Store-wide lock file for ``name``, used to serialize moves into a status directory."""
    locks = root / LOCKS_DIR_NAME
    locks.mkdir(parents=True, exist_ok=True)
    return locks / f"{name}.lock"
