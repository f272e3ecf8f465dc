"""
dodo - Task Schema Definition
=============================
Domain model for a single day's task list: priorities, checkboxes,
checklists, tasks and the numbered task set.

Models are pydantic so a TaskSet can be written to and read back from its
per-day snapshot without a hand-written codec.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from . import formatting


def today() -> date:
    """The local calendar date"""
    return date.today()


class Priority(str, Enum):
    """Task priority levels, ordered HIGH > MEDIUM > LOW"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def to_text(self) -> str:
        """Canonical form used in the editable text, e.g. "HIGH" """
        return self.name

    @classmethod
    def from_text(cls, text: str) -> "Priority":
        """Case-insensitive inverse of to_text"""
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown priority: {text!r}") from None

    # str's own comparisons would order these alphabetically
    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class Checkbox(BaseModel):
    """A single checklist item that can be ticked on and off"""
    description: str
    is_done: bool = False

    @classmethod
    def with_description(cls, description: str) -> "Checkbox":
        return cls(description=description)

    def with_status(self, is_done: bool) -> "Checkbox":
        return self.model_copy(update={"is_done": is_done})

    def toggle(self) -> None:
        self.is_done = not self.is_done

    def __str__(self) -> str:
        return formatting.render_checkbox(self)


class Checklist(BaseModel):
    """Ordered sub-items of a task. Duplicates are allowed."""
    checkboxes: List[Checkbox] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.checkboxes)

    def __getitem__(self, idx: int) -> Checkbox:
        return self.checkboxes[idx]

    def __str__(self) -> str:
        return formatting.render_checklist(self)

    def is_empty(self) -> bool:
        return len(self.checkboxes) == 0

    def all_done(self) -> bool:
        """True when every checkbox is ticked (vacuously true when empty)"""
        return all(cb.is_done for cb in self.checkboxes)

    def get(self, idx: int) -> Optional[Checkbox]:
        """The checkbox at idx, or None when idx is out of range.

        The returned checkbox is the stored one, so toggling it changes
        the checklist.
        """
        if not 0 <= idx < len(self.checkboxes):
            return None
        return self.checkboxes[idx]

    def push(self, checkbox: Checkbox) -> None:
        self.checkboxes.append(checkbox)

    def remove(self, idx: int) -> Checkbox:
        """Remove and return the checkbox at idx.

        Does not preserve ordering: the last checkbox is moved into the
        freed slot. Raises IndexError when idx is out of range.
        """
        if not 0 <= idx < len(self.checkboxes):
            raise IndexError(f"checkbox index {idx} out of range ({len(self.checkboxes)} checkboxes)")
        last = self.checkboxes.pop()
        if idx == len(self.checkboxes):
            return last
        removed = self.checkboxes[idx]
        self.checkboxes[idx] = last
        return removed


class Task(BaseModel):
    """A to-do item for the day.

    Comparison operators rank tasks by urgency: priority first, and for two
    tasks of equal priority that both have due dates, the one due sooner
    ranks higher. This is only used for sorting views; it never changes
    the stored order.
    """
    name: str
    is_done: bool = False
    creation_date: date = Field(default_factory=today)
    due_date: Optional[date] = None
    priority: Priority = Priority.MEDIUM
    checklist: Checklist = Field(default_factory=Checklist)

    # Number the user typed in front of the task; not persisted
    stated_index: Optional[int] = Field(default=None, exclude=True)

    def toggle(self) -> None:
        self.is_done = not self.is_done

    def _urgency_cmp(self, other: "Task") -> int:
        if self.due_date is None or other.due_date is None or self.priority != other.priority:
            mine, theirs = self.priority.rank, other.priority.rank
        else:
            # Reversed: an earlier due date is more urgent
            mine, theirs = other.due_date.toordinal(), self.due_date.toordinal()
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self._urgency_cmp(other) < 0

    def __le__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self._urgency_cmp(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self._urgency_cmp(other) > 0

    def __ge__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self._urgency_cmp(other) >= 0

    def __str__(self) -> str:
        return formatting.render_task(self)


class TaskSet(BaseModel):
    """One day's tasks, numbered from 1 in the order they are stored"""
    tasks: List[Task] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    def __getitem__(self, idx: int) -> Task:
        return self.tasks[idx]

    def __str__(self) -> str:
        return formatting.render(self)

    def is_empty(self) -> bool:
        return len(self.tasks) == 0

    def append(self, task: Task) -> None:
        self.tasks.append(task)

    def unfinished(self) -> List[Task]:
        return [t for t in self.tasks if not t.is_done]

    def by_urgency(self) -> List[Task]:
        """Tasks sorted most urgent first; ties keep their stored order"""
        return sorted(self.tasks, reverse=True)

    def check_for_invalid_indices(self) -> Optional[int]:
        """First 1-based position whose task was written with another number.

        Tasks that were not parsed from text carry no stated index and are
        always consistent.
        """
        for expected, task in enumerate(self.tasks, start=1):
            if task.stated_index is not None and task.stated_index != expected:
                return expected
        return None


# ============================================================
# FIRST-RUN SAMPLE
# ============================================================

SAMPLE_TASK = {
    "name": "Fill out my tasks",
    "priority": Priority.HIGH,
    "checklist": ["Figure out how to use dodo"],
}


def sample_task(creation_date: Optional[date] = None) -> Task:
    """The single task a brand new install starts with"""
    return Task(
        name=SAMPLE_TASK["name"],
        priority=SAMPLE_TASK["priority"],
        creation_date=creation_date or today(),
        checklist=Checklist(
            checkboxes=[Checkbox.with_description(d) for d in SAMPLE_TASK["checklist"]]
        ),
    )


def sample_task_set(creation_date: Optional[date] = None) -> TaskSet:
    return TaskSet(tasks=[sample_task(creation_date)])
