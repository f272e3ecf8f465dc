"""
dodo - Text Formatting
======================
Canonical rendering of a task list into the text the user edits, plus the
date formats shared by the bookkeeping log and snapshot file names.

The rendered text is a stable external interface: whatever render() emits
must parse back to the same tasks.

    1. [ ] Fill out my tasks [HIGH]
        * [ ] Figure out how to use dodo
    2. [x] Water the plants [LOW]
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import Checkbox, Checklist, Task, TaskSet

DATE_FORMAT = "%Y-%m-%d"
SNAPSHOT_EXTENSION = ".json"
CHECKBOX_INDENT = "    "


def checkmark(is_done: bool) -> str:
    return "[x]" if is_done else "[ ]"


def render_checkbox(checkbox: "Checkbox") -> str:
    return f"{checkmark(checkbox.is_done)} {checkbox.description}"


def render_checklist(checklist: "Checklist") -> str:
    return "".join(
        f"{CHECKBOX_INDENT}* {render_checkbox(cb)}\n" for cb in checklist.checkboxes
    )


def render_task(task: "Task") -> str:
    """Task header line followed by its checklist, without the leading number"""
    header = f"{checkmark(task.is_done)} {task.name} [{task.priority.to_text()}]\n"
    return header + render_checklist(task.checklist)


def render(task_set: "TaskSet") -> str:
    """Render a whole task list, numbering tasks from 1"""
    return "".join(
        f"{i}. {render_task(task)}" for i, task in enumerate(task_set.tasks, start=1)
    )


# ========================================
# DATES
# ========================================

def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date(text: str) -> date:
    """Strict inverse of format_date; raises ValueError on anything else"""
    day = datetime.strptime(text, DATE_FORMAT).date()
    # strptime tolerates unpadded fields ("2024-1-5")
    if format_date(day) != text:
        raise ValueError(f"date {text!r} is not in {DATE_FORMAT} form")
    return day


def snapshot_filename(day: date) -> str:
    return format_date(day) + SNAPSHOT_EXTENSION
