#!/usr/bin/env python3
"""
dodo - CLI Interface
====================
Command-line tool for today's task list.

Usage:
    dodo                      Edit today's tasks in $EDITOR
    dodo show --urgent        Print today's tasks, most urgent first
    dodo toggle 2             Mark task 2 done / not done
    dodo toggle 2 1           Toggle checkbox 1 of task 2
    dodo add "Call mom" -p high
    dodo rm 2 1               Remove checkbox 1 of task 2
    dodo log                  List days that have a task list
"""

import argparse
import logging
import sys
from functools import partial
from typing import List, Optional

from .bookkeeper import Bookkeeper
from .config import Settings
from .editor import edit
from .errors import DodoError
from .manager import DailyManager
from .schema import Priority
from .storage import SnapshotStore, prepare_data_dir

logger = logging.getLogger("dodo")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dodo",
        description="dodo - daily task lists that roll over",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dodo                          Edit today's tasks (same as `dodo edit`)
  dodo show                     Show today's tasks
  dodo show --urgent            Show today's tasks, most urgent first
  dodo toggle 1                 Toggle task 1
  dodo toggle 1 2               Toggle checkbox 2 of task 1
  dodo add "Do the dishes" -p low
  dodo rm 1 2                   Remove checkbox 2 of task 1
  dodo log                      List recorded days
        """
    )
    parser.add_argument("--dir", help="Data directory (default: $DODO_DATA_DIR or ~/.local/share/dodo)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # EDIT command
    subparsers.add_parser("edit", help="Edit today's tasks in your editor")

    # SHOW command
    show_parser = subparsers.add_parser("show", help="Print today's tasks")
    show_parser.add_argument("--urgent", action="store_true", help="Most urgent first")

    # TOGGLE command
    toggle_parser = subparsers.add_parser("toggle", help="Toggle a task or checkbox")
    toggle_parser.add_argument("task", type=int, help="Task number")
    toggle_parser.add_argument("checkbox", type=int, nargs="?", help="Checkbox number")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a task")
    add_parser.add_argument("name", help="Task name")
    add_parser.add_argument(
        "-p", "--priority",
        type=Priority.from_text,
        default=Priority.MEDIUM,
        help="high, medium or low (default: medium)",
    )

    # RM command
    rm_parser = subparsers.add_parser(
        "rm", help="Remove a checkbox from a task (the last checkbox takes its place)"
    )
    rm_parser.add_argument("task", type=int, help="Task number")
    rm_parser.add_argument("checkbox", type=int, help="Checkbox number")

    # LOG command
    subparsers.add_parser("log", help="List days that have a task list")

    return parser


def run_command(args: argparse.Namespace, manager: DailyManager) -> int:
    command = args.command or "edit"

    if command == "edit":
        result = manager.edit_today()
        if not result.changed:
            print(f"No changes to {manager.today.isoformat()}")
            return 0
        print(f"✅ Saved {len(result.tasks)} task(s) for {manager.today.isoformat()}")
        if result.remainder:
            print(f"⚠️ Ignored text that could not be parsed:\n{result.remainder}")
        if result.invalid_index is not None:
            print(f"⚠️ Task numbers out of sequence from #{result.invalid_index}")

    elif command == "show":
        print(manager.status_report(by_urgency=args.urgent))

    elif command == "toggle":
        task = manager.toggle(args.task, args.checkbox)
        if args.checkbox is None:
            state = "done" if task.is_done else "not done"
            print(f"{'✅' if task.is_done else '⬜'} {task.name}: {state}")
        else:
            checkbox = task.checklist[args.checkbox - 1]
            print(f"{task.name}: {checkbox}")

    elif command == "add":
        task = manager.add_task(args.name, args.priority)
        print(f"➕ Added: {task.name} [{task.priority.to_text()}]")

    elif command == "rm":
        removed = manager.remove_checkbox(args.task, args.checkbox)
        print(f"🗑️ Removed: {removed.description}")

    elif command == "log":
        manager.ensure_today()
        for day in manager.bookkeeper.entries():
            print(day.isoformat())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data_dir = prepare_data_dir(args.dir or settings.data_dir)
        store = SnapshotStore(data_dir)
        with Bookkeeper.init(data_dir, store) as bookkeeper:
            manager = DailyManager(bookkeeper, store, editor=partial(edit, editor=settings.editor))
            return run_command(args, manager)
    except DodoError as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
