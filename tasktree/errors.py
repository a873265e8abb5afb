"""Error kinds raised by tasktree.

Every error carries a stable ``code`` string so the CLI and the RPC server
can report each kind distinctly, and an ``exit_status`` used by the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tasktree.task_model import TaskStatus


class TaskTreeError(Exception):
    """Base class for every tasktree error."""

    code = "internal_error"
    exit_status = 1


class StoreNotFoundError(TaskTreeError):
    """No task store could be located."""

    code = "store_not_found"
    exit_status = 3


class ConfigError(TaskTreeError):
    """The store configuration file is unreadable or invalid."""

    code = "config_error"
    exit_status = 4


class InvalidRequestError(TaskTreeError):
    """A request parameter cannot be interpreted."""

    code = "invalid_params"
    exit_status = 2


class InvalidTaskIdError(TaskTreeError):
    """A task identifier is not structurally valid."""

    code = "invalid_task_id"
    exit_status = 5

    def __init__(self, task_id: str, reason: str):
        super().__init__(f"Invalid task id {task_id!r}: {reason}")
        self.task_id = task_id
        self.reason = reason


class TaskIOError(TaskTreeError):
    """Reading, writing or moving a task on disk failed."""

    code = "io_error"
    exit_status = 7

    def __init__(self, message: str, path: Path | None = None, cause: BaseException | None = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class TaskNotFoundError(TaskIOError):
    """No task directory exists for the requested id."""

    code = "task_not_found"
    exit_status = 6

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskExistsError(TaskIOError):
    """The destination of a create or move is already occupied."""

    code = "task_exists"


# =============================================================================
# Frontmatter parsing
# =============================================================================


@dataclass(frozen=True)
class Diagnostic:
    """Location and description of a parse error.

    ``line`` is 1-based (the opening ``---`` is line 1). Columns are 0-based
    offsets into that line; ``column_end`` is exclusive.
    """

    line: int
    column_start: int
    column_end: int
    message: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column_start}-{self.column_end}: {self.message}"


class FrontmatterError(TaskTreeError):
    """A task file could not be parsed."""

    code = "parse_error"
    exit_status = 8

    def __init__(self, diagnostic: Diagnostic, path: Path | None = None):
        self.diagnostic = diagnostic
        self.path = path
        location = f"{path}:" if path else "line "
        super().__init__(f"{location}{diagnostic}")

    def with_path(self, path: Path) -> FrontmatterError:
        return FrontmatterError(self.diagnostic, path)


# =============================================================================
# Record validation
# =============================================================================


class TaskValidationError(TaskTreeError):
    """A task record breaks one of its invariants."""

    code = "validation_failed"
    exit_status = 9
    # True when the sync pass knows how to repair the record
    correctable = False


class InvalidTitle(TaskValidationError):
    pass


class InvalidOwner(TaskValidationError):
    pass


class InvalidStatus(TaskValidationError):
    pass


class InvalidPriority(TaskValidationError):
    pass


class InvalidPriorityValue(TaskValidationError):
    pass


class InvalidTimestamp(TaskValidationError):
    pass


class InvalidTags(TaskValidationError):
    pass


class InvalidWaitingOn(TaskValidationError):
    pass


class InvalidExtensionLine(TaskValidationError):
    pass


class WaitingFoundButAllValid(TaskValidationError):
    """A non-waiting task carries a structurally valid waiting_on list."""

    correctable = True


class WaitingOnMissing(TaskValidationError):
    """Status is waiting but waiting_on is absent."""


class CompletedMissing(TaskValidationError):
    """Status is done or cancelled but completed is absent."""


class CompletedNotAllowed(TaskValidationError):
    """Status is open but completed is set."""


# =============================================================================
# Status transitions
# =============================================================================


class TransitionError(TaskTreeError):
    """A requested status change is not allowed."""

    code = "transition_error"
    exit_status = 10

    def __init__(self, message: str, from_status: TaskStatus, to_status: TaskStatus):
        super().__init__(message)
        self.from_status = from_status
        self.to_status = to_status


class ShouldBeWaiting(TransitionError):
    """The task still has unresolved dependencies."""


class ShouldBeDone(TransitionError):
    """A done task cannot become cancelled directly."""


class ShouldBeCancelled(TransitionError):
    """A cancelled task cannot become done directly."""
