"""
dodo - Daily Task Lists
=======================

Keeps one task list per day. Whatever you didn't finish yesterday is waiting
for you today, and the list is edited as plain text in your own editor.

Usage:
    from dodo import Bookkeeper, DailyManager, SnapshotStore, prepare_data_dir

    data_dir = prepare_data_dir()
    store = SnapshotStore(data_dir)
    with Bookkeeper.init(data_dir, store) as bookkeeper:
        manager = DailyManager(bookkeeper, store, editor=edit)
        manager.ensure_today()       # seed or roll yesterday's tasks forward
        manager.edit_today()         # render -> $EDITOR -> parse -> save

The text format:

    1. [ ] Fill out my tasks [HIGH]
        * [ ] Figure out how to use dodo
"""

from .schema import (
    Priority,
    Checkbox,
    Checklist,
    Task,
    TaskSet,
    sample_task,
    sample_task_set,
)
from .formatting import render
from .parser import parse, parse_document, ParsedDocument
from .storage import SnapshotStore, prepare_data_dir
from .bookkeeper import Bookkeeper
from .editor import edit
from .manager import DailyManager, RolloverAction, EditResult
from .errors import DodoError

__version__ = "0.1.0"
__all__ = [
    "Priority",
    "Checkbox",
    "Checklist",
    "Task",
    "TaskSet",
    "sample_task",
    "sample_task_set",
    "render",
    "parse",
    "parse_document",
    "ParsedDocument",
    "SnapshotStore",
    "prepare_data_dir",
    "Bookkeeper",
    "edit",
    "DailyManager",
    "RolloverAction",
    "EditResult",
    "DodoError",
]
