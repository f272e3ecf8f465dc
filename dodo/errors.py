"""
dodo - Error Taxonomy
=====================
Every fatal condition a run can hit. The CLI catches DodoError once at the
top level, prints the message and exits non-zero.

Parse problems in user-edited text are deliberately absent: the parser
recovers from them instead of raising.
"""

from datetime import date
from pathlib import Path
from typing import Optional


class DodoError(Exception):
    """Base class for every error surfaced to the user"""


class DodoIOError(DodoError):
    """Filesystem failure not covered by a more specific error"""

    def __init__(self, path: Optional[Path], reason: str):
        self.path = path
        self.reason = reason
        where = f" ({path})" if path is not None else ""
        super().__init__(f"I/O error{where}: {reason}")


class EditorError(DodoIOError):
    """The external editor could not be launched or exited abnormally"""

    def __init__(self, editor: Optional[str], reason: str):
        self.editor = editor
        super().__init__(None, reason)

    def __str__(self) -> str:
        return f"Editor `{self.editor or '$EDITOR'}` failed: {self.reason}"


class InvalidLogError(DodoError):
    """The bookkeeping log is not made of whole fixed-width records"""

    def __init__(self, path: Path, size: int, record_len: int):
        self.path = path
        self.size = size
        self.record_len = record_len
        super().__init__(
            f"The bookkeeping file is invalid: {path} is {size} bytes, "
            f"expected a multiple of {record_len}"
        )


class MalformedLogRecordError(DodoError):
    """The last record of a correctly sized log is not a date.

    The size check guarantees whole records, so reaching this means the log
    was written by something other than dodo.
    """

    def __init__(self, path: Path, record: bytes):
        self.path = path
        self.record = record
        super().__init__(f"Malformed line in bookkeeping file {path}: {record!r}")


class NoValidHomeDirError(DodoError):
    def __init__(self) -> None:
        super().__init__("No valid home directory was found")


class CouldNotCreateFolderError(DodoError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Could not create folder `{path}`{suffix}")


class SnapshotMissingError(DodoError):
    """A date is recorded in the log but its snapshot file is gone"""

    def __init__(self, day: date, path: Path):
        self.day = day
        self.path = path
        super().__init__(f"No task list snapshot for {day.isoformat()} (expected {path})")


class SnapshotDecodeError(DodoError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not decode task list snapshot {path}: {reason}")


class NoSuchItemError(DodoError):
    """The user referenced a task or checkbox number that does not exist"""

    def __init__(self, what: str, number: int, available: int):
        self.what = what
        self.number = number
        self.available = available
        super().__init__(f"No {what} #{number} (there are {available})")


class InvalidTaskNameError(DodoError):
    """A task name that the editable text format cannot hold"""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid task name {name!r}: {reason}")
