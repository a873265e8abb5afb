"""Per-store configuration.

Read from ``<store>/config.yaml`` when present. Every key is optional::

    default_owner: sam
    default_priority: medium
    default_priority_value: 50
    sync_workers: 8
    sync_before_query: true
    id_retries: 8
"""

from __future__ import annotations

import getpass
import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tasktree.errors import ConfigError
from tasktree.paths import config_path
from tasktree.task_model import PRIORITY_VALUE_MAX, TaskPriority

logger = logging.getLogger(__name__)

FALLBACK_OWNER = "unknown"


class TaskTreeConfig(BaseModel):
    """Settings for one task store."""

    model_config = ConfigDict(extra="forbid")

    # None means the current user
    default_owner: str | None = None
    default_priority: TaskPriority = TaskPriority.MEDIUM
    default_priority_value: int = Field(default=50, ge=0, le=PRIORITY_VALUE_MAX)

    # Threads used to read task files during sync
    sync_workers: int = Field(default=8, ge=1)
    # Reconcile the store before find and pick
    sync_before_query: bool = True
    # Attempts at a fresh id when a generated one is already taken
    id_retries: int = Field(default=8, ge=1)

    def owner(self) -> str:
        """Owner for new tasks: configured value, then $USER, then a fallback."""
        if self.default_owner:
            return self.default_owner
        user = os.environ.get("USER") or os.environ.get("USERNAME")
        if user:
            return user
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return FALLBACK_OWNER

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)


def load_config(root: Path) -> TaskTreeConfig:
    """Load the store configuration, falling back to defaults.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values.
    """
    path = config_path(root)
    if not path.exists():
        return TaskTreeConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if data is None:
        return TaskTreeConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    try:
        return TaskTreeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
