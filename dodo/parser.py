"""
dodo - Task List Parser
=======================
Turns the text the user saved from their editor back into a TaskSet.

Grammar:

    tasklist   := task*
    task       := header checkbox*
    header     := ws* index "." ws* checkmark ws* name "[" priority "]"
    index      := digit+
    checkmark  := "[" ( "x" | "X" | " " ) "]"
    name       := any-chars-until "["             (trimmed)
    priority   := HIGH | MEDIUM | LOW             (any case)
    checkbox   := ws* "*" ws* checkmark any-chars-until-newline   (trimmed)

Every rule is a function ``rule(text) -> (value, rest)`` that raises
ParseFailure when the input does not match, so rules can be tried, retried
and tested on their own.

The parser is lenient: parsing stops at the first task that does not match
and whatever is left is reported, never raised.
"""

import logging
import re
from datetime import date
from typing import List, NamedTuple, Optional, Tuple

from .schema import Checkbox, Checklist, Priority, Task, TaskSet, today

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[0-9]+")
_PRIORITY_RE = re.compile(r"\[(high|medium|low)\]", re.IGNORECASE)
_CHECKED = "xX"
_UNCHECKED = " "


class ParseFailure(Exception):
    """A grammar rule did not match at the start of `remaining`"""

    def __init__(self, rule: str, remaining: str):
        self.rule = rule
        self.remaining = remaining
        preview = remaining[:30] + ("..." if len(remaining) > 30 else "")
        super().__init__(f"expected {rule} at {preview!r}")


class TaskHeader(NamedTuple):
    index: int
    is_done: bool
    name: str
    priority: Priority


class ParsedDocument(NamedTuple):
    tasks: TaskSet
    # Unparsed text after the last task, stripped; "" on a clean parse
    remainder: str


# ========================================
# GRAMMAR RULES
# ========================================

def _take_till(text: str, stop: str) -> Tuple[str, str]:
    pos = text.find(stop)
    if pos == -1:
        return text, ""
    return text[:pos], text[pos:]


def parse_index(text: str) -> Tuple[int, str]:
    """Parse a task number followed by a dot, e.g. "1." or "230." """
    text = text.lstrip()
    match = _INDEX_RE.match(text)
    if not match:
        raise ParseFailure("task number", text)
    rest = text[match.end():]
    if not rest.startswith("."):
        raise ParseFailure("'.' after task number", rest)
    return int(match.group()), rest[1:]


def parse_checkmark(text: str) -> Tuple[bool, str]:
    """Parse "[x]", "[X]" or "[ ]" into a done flag"""
    text = text.lstrip()
    if len(text) < 3 or text[0] != "[" or text[2] != "]" or text[1] not in _CHECKED + _UNCHECKED:
        raise ParseFailure("checkmark", text)
    return text[1] in _CHECKED, text[3:]


def parse_name(text: str) -> Tuple[str, str]:
    """Everything up to the next "[", trimmed. May be empty."""
    name, rest = _take_till(text, "[")
    return name.strip(), rest


def parse_priority(text: str) -> Tuple[Priority, str]:
    """Parse "[HIGH]", "[medium]", "[Low]", ..."""
    match = _PRIORITY_RE.match(text)
    if not match:
        raise ParseFailure("priority", text)
    return Priority.from_text(match.group(1)), text[match.end():]


def parse_task_header(text: str) -> Tuple[TaskHeader, str]:
    index, rest = parse_index(text)
    is_done, rest = parse_checkmark(rest)
    name, rest = parse_name(rest)
    priority, rest = parse_priority(rest)
    return TaskHeader(index, is_done, name, priority), rest


def parse_checkbox(text: str) -> Tuple[Checkbox, str]:
    """Parse one checklist line, e.g. "    * [x] Finish this" """
    text = text.lstrip()
    if not text.startswith("*"):
        raise ParseFailure("'*'", text)
    is_done, rest = parse_checkmark(text[1:])
    description, rest = _take_till(rest, "\n")
    return Checkbox.with_description(description.strip()).with_status(is_done), rest


def parse_checkboxes(text: str) -> Tuple[List[Checkbox], str]:
    """Zero or more checkboxes; never fails"""
    checkboxes = []
    rest = text
    while True:
        try:
            checkbox, rest = parse_checkbox(rest)
        except ParseFailure:
            return checkboxes, rest
        checkboxes.append(checkbox)


def parse_task(text: str, creation_date: Optional[date] = None) -> Tuple[Task, str]:
    """Parse a task header and its checklist.

    The text format carries no dates: the task is created on
    `creation_date` (today by default) with no due date.
    """
    header, rest = parse_task_header(text)
    checkboxes, rest = parse_checkboxes(rest)
    task = Task(
        name=header.name,
        is_done=header.is_done,
        creation_date=creation_date or today(),
        due_date=None,
        priority=header.priority,
        checklist=Checklist(checkboxes=checkboxes),
        stated_index=header.index,
    )
    return task, rest


# ========================================
# DOCUMENT
# ========================================

def parse_document(text: str, creation_date: Optional[date] = None) -> ParsedDocument:
    """Parse as many tasks as possible and report what was left over"""
    tasks = []
    rest = text
    while True:
        try:
            task, rest = parse_task(rest, creation_date)
        except ParseFailure as failure:
            remainder = rest.strip()
            if remainder:
                logger.warning(f"⚠️ Parsing stopped after {len(tasks)} task(s): {failure}")
            break
        tasks.append(task)

    return ParsedDocument(TaskSet(tasks=tasks), remainder)


def parse(text: str, creation_date: Optional[date] = None) -> TaskSet:
    """Parse edited text into a TaskSet. Never raises on bad input."""
    return parse_document(text, creation_date).tasks
