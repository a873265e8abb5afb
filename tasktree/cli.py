#!/usr/bin/env python3
"""tasktree command line.

Usage:
    tasktree init                               # create .tasktree here
    tasktree todo "Write release notes" --priority high --tags docs,release
    tasktree move quiet_gecko_7hx waiting --waiting-on brave_otter_2k9
    tasktree done quiet_gecko_7hx
    tasktree find --status todo --tags and:docs,release
    tasktree pick --limit 5
    tasktree sync --json
    tasktree server                             # MCP server on stdio

Exit status is 0 on success and otherwise identifies the error kind (see
``tasktree.errors``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from tasktree import operations
from tasktree.errors import TaskTreeError
from tasktree.operations import FIELD_NAMES, ListFilter, TaskQuery, parse_enum
from tasktree.task_model import TaskPriority, TaskStatus
from tasktree.task_storage import TaskStorage, init_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _split(text: str | None) -> list[str] | None:
    if text is None:
        return None
    return [item.strip() for item in text.split(",") if item.strip()]


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _print_table(rows: list[dict[str, Any]]) -> None:
    if not rows:
        print("No tasks found.")
        return
    columns = list(rows[0])
    cells = [[("" if row[c] is None else str(row[c])) for c in columns] for row in rows]
    widths = [max(len(c), *(len(r[i]) for r in cells)) for i, c in enumerate(columns)]
    print("  ".join(c.ljust(w) for c, w in zip(columns, widths)).rstrip())
    for row in cells:
        print("  ".join(v.ljust(w) for v, w in zip(row, widths)).rstrip())


def _query_from_args(args: argparse.Namespace) -> TaskQuery:
    return TaskQuery(
        status=parse_enum(TaskStatus, getattr(args, "status", None), "status"),
        priority=parse_enum(TaskPriority, args.priority, "priority"),
        owner=args.owner,
        tags=ListFilter.parse(args.tags) if args.tags else None,
        waiting_on=ListFilter.parse(args.waiting_on) if args.waiting_on else None,
    )


# =============================================================================
# Commands
# =============================================================================


def cmd_init(args: argparse.Namespace) -> int:
    root = init_store(Path(args.directory), bare=args.bare)
    print(f"Initialized task store in {root}")
    return 0


def cmd_todo(args: argparse.Namespace) -> int:
    result = operations.create_task(
        TaskStorage.discover(),
        args.title,
        description=args.description or "",
        priority=args.priority,
        priority_value=args.priority_value,
        tags=_split(args.tags),
        waiting_on=_split(args.waiting_on),
        owner=args.owner,
    )
    print(result["task_id"])
    logger.info("Created %s at %s", result["task_id"], result["file_path"])
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    data = operations.get_task(TaskStorage.discover(), args.task_id)
    if args.json:
        _print_json(data)
        return 0
    for name in FIELD_NAMES:
        if name == "description" or data[name] in (None, []):
            continue
        value = ", ".join(data[name]) if isinstance(data[name], list) else data[name]
        print(f"{name}: {value}")
    if data["description"].strip():
        print()
        print(data["description"].rstrip("\n"))
    return 0


def cmd_done(args: argparse.Namespace) -> int:
    result = operations.complete_task(TaskStorage.discover(), args.task_id)
    print(f"{result['task_id']}: done ({result['file_path']})")
    return 0


def cmd_move(args: argparse.Namespace) -> int:
    result = operations.update_task(
        TaskStorage.discover(),
        args.task_id,
        status=args.to_status,
        waiting_on=_split(args.waiting_on),
    )
    print(f"{result['task_id']}: {result['status']} ({result['file_path']})")
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    rows = operations.find_tasks(
        TaskStorage.discover(),
        _query_from_args(args),
        _split(args.fields),
        sync=False if args.no_sync else None,
    )
    if args.json:
        _print_json(rows)
    else:
        _print_table(rows)
    return 0


def cmd_pick(args: argparse.Namespace) -> int:
    rows = operations.pick_tasks(
        TaskStorage.discover(),
        _query_from_args(args),
        _split(args.fields),
        limit=args.limit,
        sync=False if args.no_sync else None,
    )
    if args.json:
        _print_json(rows)
    else:
        _print_table(rows)
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    report = operations.sync_store(TaskStorage.discover())
    if args.json:
        _print_json(report)
        return 0
    for change in report["transitions"]:
        print(f"Moved {change['task_id']}: {change['from']} -> {change['to']}")
    for update in report["updates"]:
        print(f"Updated {update['task_id']}: {update['change']} dependency {update['dependency']}")
    for failure in report["failures"]:
        print(f"Failed {failure['task_id']}: {failure['message']}", file=sys.stderr)
    print(f"Synced {report['count']} of {report['scanned']} tasks")
    return 1 if report["failures"] else 0


def cmd_server(args: argparse.Namespace) -> int:
    from tasktree.mcp_servers import tasks_server

    tasks_server.main()
    return 0


# =============================================================================
# Argument parsing
# =============================================================================


def _add_filters(parser: argparse.ArgumentParser, *, with_status: bool) -> None:
    if with_status:
        parser.add_argument("--status", choices=[s.value for s in TaskStatus])
    parser.add_argument("--priority", choices=[p.value for p in TaskPriority])
    parser.add_argument("--owner")
    parser.add_argument("--tags", help="a,b | or:a,b | and:a,b")
    parser.add_argument("--waiting-on", help="ids, with the same or:/and: prefixes as --tags")
    parser.add_argument("--fields", help=f"comma separated, from: {', '.join(FIELD_NAMES)}")
    parser.add_argument("--json", action="store_true", help="Print JSON")
    parser.add_argument("--no-sync", action="store_true", help="Skip the sync pass before querying")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasktree", description="Plain-text task tracker")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Create a task store")
    init.add_argument("directory", nargs="?", default=".")
    init.add_argument("--bare", action="store_true", help="Do not write a default config.yaml")
    init.set_defaults(handler=cmd_init)

    todo = commands.add_parser("todo", aliases=["new"], help="Create a task")
    todo.add_argument("title")
    todo.add_argument("--description")
    todo.add_argument("--priority", choices=[p.value for p in TaskPriority])
    todo.add_argument("--priority-value", type=int)
    todo.add_argument("--owner")
    todo.add_argument("--tags", help="Comma separated tags")
    todo.add_argument("--waiting-on", help="Comma separated task ids")
    todo.set_defaults(handler=cmd_todo)

    show = commands.add_parser("show", help="Show one task")
    show.add_argument("task_id")
    show.add_argument("--json", action="store_true", help="Print JSON")
    show.set_defaults(handler=cmd_show)

    done = commands.add_parser("done", help="Mark a task done")
    done.add_argument("task_id")
    done.set_defaults(handler=cmd_done)

    move = commands.add_parser("move", help="Change a task's status")
    move.add_argument("task_id")
    move.add_argument("to_status", choices=[s.value for s in TaskStatus])
    move.add_argument("--waiting-on", help="Comma separated task ids (for waiting)")
    move.set_defaults(handler=cmd_move)

    find = commands.add_parser("find", help="List tasks matching filters")
    _add_filters(find, with_status=True)
    find.set_defaults(handler=cmd_find)

    pick = commands.add_parser("pick", help="List todo tasks, most pressing first")
    _add_filters(pick, with_status=False)
    pick.add_argument("--limit", type=int)
    pick.set_defaults(handler=cmd_pick)

    sync = commands.add_parser("sync", help="Reconcile directories with task files")
    sync.add_argument("--json", action="store_true", help="Print JSON")
    sync.set_defaults(handler=cmd_sync)

    server = commands.add_parser("server", help="Run the MCP server on stdio")
    server.set_defaults(handler=cmd_server)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    try:
        return args.handler(args)
    except TaskTreeError as e:
        print(f"error: {e}", file=sys.stderr)
        return e.exit_status


if __name__ == "__main__":
    sys.exit(main())
