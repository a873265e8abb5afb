"""Task file parsing and serialization.

File layout::

    ---
    title: Write the release notes
    status: waiting
    priority: high
    priority_value: 80
    owner: sam
    waiting_on:
    - "[[quiet_gecko_7hx]]"
    created: 2026-03-01T09:30:00Z
    estimate: 2h
    ---
    Free-form markdown description.

Header lines are ``name: value``. List fields have nothing after the colon
and take the ``- item`` lines that immediately follow. Lines that match no
known field (``estimate`` above) are kept verbatim and written back after
the known fields, so ``serialize_task(parse_task(text))`` never loses data.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from tasktree.errors import Diagnostic, FrontmatterError
from tasktree.task_model import (
    FIELD_TABLE,
    FIELDS_BY_NAME,
    PRIORITY_VALUE_MAX,
    FieldKind,
    FieldSpec,
    Task,
    TaskPriority,
    TaskStatus,
    format_timestamp,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

DELIMITER = "---"
LIST_ITEM_PREFIX = "- "

_FIELD_LINE = re.compile(r"^(?P<name>[A-Za-z_][A-Za-z0-9_]*)[ \t]*:(?P<value>.*)$")


def _error(line: int, start: int, end: int, message: str) -> FrontmatterError:
    return FrontmatterError(Diagnostic(line, start, end, message))


def _parse_scalar(field_def: FieldSpec, raw: str, line_no: int, column: int) -> Any:
    """Convert one scalar value; raise a diagnostic spanning the value."""
    end = column + len(raw)
    if field_def.kind is FieldKind.TEXT:
        return raw
    value = raw.rstrip(" \t")
    if field_def.kind is FieldKind.UINT8:
        if not (value.isascii() and value.isdigit()) or int(value) > PRIORITY_VALUE_MAX:
            raise _error(
                line_no, column, end,
                f"`{field_def.name}` must be an integer from 0 to {PRIORITY_VALUE_MAX}",
            )
        return int(value)
    if field_def.kind is FieldKind.STATUS:
        try:
            return TaskStatus(value)
        except ValueError:
            raise _error(line_no, column, end, f"unknown status `{value}`") from None
    if field_def.kind is FieldKind.PRIORITY:
        try:
            return TaskPriority(value)
        except ValueError:
            raise _error(line_no, column, end, f"unknown priority `{value}`") from None
    if field_def.kind is FieldKind.TIMESTAMP:
        try:
            return parse_timestamp(value)
        except ValueError:
            raise _error(
                line_no, column, end,
                f"`{field_def.name}` must be a timestamp like 2026-01-31T23:59:00Z",
            ) from None
    raise _error(line_no, column, end, f"`{field_def.name}` is not a scalar field")


def parse_task(data: str | bytes) -> Task:
    """Parse the text of a task file.

    Args:
        data: File content, as text or UTF-8 bytes

    Returns:
        The parsed Task. Fields are parsed but not cross-validated; see
        ``tasktree.task_validation.validate_task``.

    Raises:
        FrontmatterError: On the first problem found, with its location.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise _error(1, 0, 0, f"file is not valid utf-8: {e.reason}") from None
    if not data:
        raise _error(1, 0, 0, "insufficient data")

    lines = data.split("\n")
    if lines[0] != DELIMITER:
        raise _error(1, 0, len(lines[0]), f"expected `{DELIMITER}` on the first line")

    try:
        closing = lines.index(DELIMITER, 1)
    except ValueError:
        last = len(lines) if lines[-1] or len(lines) == 1 else len(lines) - 1
        raise _error(last, 0, len(lines[last - 1]), "failed to find end of header") from None

    values: dict[str, Any] = {}
    seen: set[str] = set()
    extension_lines: list[str] = []

    index = 1
    while index < closing:
        line = lines[index]
        line_no = index + 1
        index += 1

        match = _FIELD_LINE.match(line)
        field_def = FIELDS_BY_NAME.get(match.group("name")) if match else None
        if field_def is None:
            extension_lines.append(line)
            continue

        if field_def.name in seen:
            raise _error(line_no, 0, len(field_def.name), f"duplicate field `{field_def.name}`")
        seen.add(field_def.name)

        raw = match.group("value")
        stripped = raw.lstrip(" \t")
        column = match.start("value") + len(raw) - len(stripped)

        if field_def.is_list:
            if stripped.strip(" \t"):
                raise _error(
                    line_no, column, len(line),
                    f"`{field_def.name}` items must be listed on the following lines",
                )
            items = []
            while index < closing and lines[index].startswith(LIST_ITEM_PREFIX):
                item = lines[index][len(LIST_ITEM_PREFIX):]
                if not item:
                    raise _error(index + 1, 0, len(lines[index]), f"empty `{field_def.name}` item")
                items.append(item)
                index += 1
            if not items:
                if field_def.required:
                    raise _error(line_no, 0, len(line), f"`{field_def.name}` needs at least one item")
                logger.debug("Empty list for %s treated as absent", field_def.name)
                continue
            values[field_def.name] = items
            continue

        if not stripped:
            raise _error(line_no, 0, len(line), f"missing value for `{field_def.name}`")
        values[field_def.name] = _parse_scalar(field_def, stripped, line_no, column)

    for field_def in FIELD_TABLE:
        if field_def.required and field_def.name not in seen:
            raise _error(closing + 1, 0, len(DELIMITER), f"missing required field `{field_def.name}`")

    return Task(
        **values,
        description="\n".join(lines[closing + 1:]),
        extension_lines=extension_lines,
    )


def _format_scalar(field_def: FieldSpec, value: Any) -> str:
    if field_def.kind in (FieldKind.STATUS, FieldKind.PRIORITY):
        return value.value
    if field_def.kind is FieldKind.TIMESTAMP:
        return format_timestamp(value)
    return str(value)


def serialize_task(task: Task) -> str:
    """Render a task as file text.

    Known fields come first in ``FIELD_TABLE`` order, then extension lines in
    their original order, then the closing delimiter and the description
    exactly as stored.
    """
    lines = [DELIMITER]
    for field_def in FIELD_TABLE:
        value = getattr(task, field_def.name)
        if value is None:
            continue
        if field_def.is_list:
            if not value:
                continue
            lines.append(f"{field_def.name}:")
            lines.extend(f"{LIST_ITEM_PREFIX}{item}" for item in value)
        else:
            lines.append(f"{field_def.name}: {_format_scalar(field_def, value)}")
    lines.extend(task.extension_lines)
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n" + task.description


def serialize_task_bytes(task: Task) -> bytes:
    return serialize_task(task).encode("utf-8")


def is_known_field_line(line: str) -> bool:
    """True when ``line`` would be read back as a known header field."""
    match = _FIELD_LINE.match(line)
    return bool(match and match.group("name") in FIELDS_BY_NAME)
