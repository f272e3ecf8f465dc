"""
dodo - Daily Manager
====================
Runs the daily rollover and the operations the user drives on today's tasks.

Rollover, checked on every run before anything else:
- today already has a snapshot      -> nothing to do
- the log's last day is today       -> very first run, seed a sample task
- the log's last day is in the past -> carry that day's tasks into today
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .bookkeeper import Bookkeeper
from .errors import InvalidTaskNameError, NoSuchItemError
from .formatting import render, render_task
from .parser import parse_document
from .schema import Checkbox, Priority, Task, TaskSet, sample_task_set
from .storage import SnapshotStore

logger = logging.getLogger(__name__)

EditFn = Callable[[str], str]


class RolloverAction(str, Enum):
    """What ensure_today() had to do"""
    NONE = "none"         # Today's snapshot already existed
    SEEDED = "seeded"     # First run ever, sample task written
    CARRIED = "carried"   # Previous day's tasks copied into today


@dataclass
class EditResult:
    tasks: TaskSet
    remainder: str                  # Text discarded by the parser
    invalid_index: Optional[int]    # First position with a mismatched number
    changed: bool = True            # False when the editor returned the text untouched


class DailyManager:
    """
    Today's task list on top of the bookkeeper and the snapshot store.

    Every mutation is saved immediately through Bookkeeper.append_to_today.
    """

    def __init__(
        self,
        bookkeeper: Bookkeeper,
        store: SnapshotStore,
        editor: Optional[EditFn] = None,
    ):
        self.bookkeeper = bookkeeper
        self.store = store
        self.editor = editor

    @property
    def today(self):
        return self.bookkeeper.today

    # ========================================
    # ROLLOVER
    # ========================================

    def ensure_today(self) -> RolloverAction:
        """Make sure today has a snapshot, seeding or carrying tasks forward"""
        # Checked first: last_entry == today also holds on every same-day rerun
        if self.store.exists(self.today):
            return RolloverAction.NONE

        if self.bookkeeper.last_entry == self.today:
            self.bookkeeper.append_to_today(sample_task_set(self.today))
            logger.info("🌱 First run: seeded today's list with a sample task")
            return RolloverAction.SEEDED

        previous_day = self.bookkeeper.last_entry
        tasks = self.bookkeeper.last_entry_taskset()
        self.bookkeeper.append_to_today(tasks)
        logger.info(
            f"🔄 Carried {len(tasks)} task(s) from {previous_day.isoformat()} "
            f"({len(tasks.unfinished())} unfinished)"
        )
        return RolloverAction.CARRIED

    def today_taskset(self) -> TaskSet:
        self.ensure_today()
        return self.store.load(self.today)

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def edit_today(self) -> EditResult:
        """Round-trip today's tasks through the editor and save the result"""
        if self.editor is None:
            raise ValueError("No editor configured")

        current = self.today_taskset()
        original_text = render(current)
        edited_text = self.editor(original_text)
        if edited_text == original_text:
            logger.info("No changes, today's tasks left as they were")
            return EditResult(current, "", None, changed=False)

        document = parse_document(edited_text, creation_date=self.today)

        if document.remainder:
            logger.warning(f"⚠️ Discarded unparsed text: {document.remainder!r}")

        invalid_index = document.tasks.check_for_invalid_indices()
        if invalid_index is not None:
            stated = document.tasks[invalid_index - 1].stated_index
            logger.warning(f"⚠️ Expected task number {invalid_index}, found {stated}")

        self.bookkeeper.append_to_today(document.tasks)
        return EditResult(document.tasks, document.remainder, invalid_index)

    def toggle(self, task_number: int, checkbox_number: Optional[int] = None) -> Task:
        """Toggle a task, or one of its checkboxes. Numbers start at 1."""
        tasks = self.today_taskset()
        task = self._get_task(tasks, task_number)

        if checkbox_number is None:
            task.toggle()
        else:
            checkbox = task.checklist.get(checkbox_number - 1)
            if checkbox is None:
                raise NoSuchItemError("checkbox", checkbox_number, len(task.checklist))
            checkbox.toggle()

        self.bookkeeper.append_to_today(tasks)
        return task

    def add_task(self, name: str, priority: Priority = Priority.MEDIUM) -> Task:
        name = name.strip()
        if "[" in name or "\n" in name:
            raise InvalidTaskNameError(name, "names cannot contain '[' or a line break")

        tasks = self.today_taskset()
        task = Task(name=name, priority=priority, creation_date=self.today)
        tasks.append(task)
        self.bookkeeper.append_to_today(tasks)
        logger.info(f"➕ Added task #{len(tasks)}: {task.name}")
        return task

    def remove_checkbox(self, task_number: int, checkbox_number: int) -> Checkbox:
        """Remove a checkbox; the task's last checkbox takes its place"""
        tasks = self.today_taskset()
        task = self._get_task(tasks, task_number)
        if task.checklist.get(checkbox_number - 1) is None:
            raise NoSuchItemError("checkbox", checkbox_number, len(task.checklist))

        removed = task.checklist.remove(checkbox_number - 1)
        self.bookkeeper.append_to_today(tasks)
        return removed

    # ========================================
    # REPORTING
    # ========================================

    def status_report(self, by_urgency: bool = False) -> str:
        """Human-readable view of today's tasks"""
        tasks = self.today_taskset()
        done = len(tasks) - len(tasks.unfinished())

        lines = [f"📋 {self.today.isoformat()}  ({done}/{len(tasks)} done)", ""]
        if tasks.is_empty():
            lines.append("No tasks for today")
        elif by_urgency:
            # Stored numbers, the ones toggle and rm take
            numbers = {id(task): i for i, task in enumerate(tasks.tasks, start=1)}
            lines.append("".join(
                f"{numbers[id(task)]}. {render_task(task)}" for task in tasks.by_urgency()
            ).rstrip("\n"))
        else:
            lines.append(render(tasks).rstrip("\n"))
        return "\n".join(lines)

    # ========================================
    # HELPER METHODS
    # ========================================

    def _get_task(self, tasks: TaskSet, task_number: int) -> Task:
        if not 1 <= task_number <= len(tasks):
            raise NoSuchItemError("task", task_number, len(tasks))
        return tasks[task_number - 1]
