"""
dodo - Bookkeeper
=================
Tracks which days have a task list snapshot.

The bookkeeping log is append-only and made of fixed 11-byte records, one
per day, each "YYYY-MM-DD\\n". Its last record is the most recent day that
has a snapshot; that day's tasks are what roll forward into today.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .errors import DodoIOError, InvalidLogError, MalformedLogRecordError
from .formatting import format_date, parse_date
from .schema import TaskSet, today as local_today
from .storage import SnapshotStore

logger = logging.getLogger(__name__)

LOG_FILENAME = "bookkeeper"
DATE_LEN = 10
RECORD_LEN = DATE_LEN + 1


def encode_record(day: date) -> bytes:
    return (format_date(day) + "\n").encode("ascii")


def decode_record(record: bytes) -> date:
    """Raises ValueError unless `record` is exactly one well-formed record"""
    if len(record) != RECORD_LEN or not record.endswith(b"\n"):
        raise ValueError("record is not a newline-terminated date")
    return parse_date(record[:DATE_LEN].decode("ascii"))


class Bookkeeper:
    """
    Owns the bookkeeping log for the duration of one run.

    `last_entry` is the latest day recorded in the log, or today when the
    log is still empty. Use as a context manager so the log is closed on
    every exit path.
    """

    def __init__(
        self,
        log_file: BinaryIO,
        log_path: Path,
        store: SnapshotStore,
        last_entry: date,
        today: date,
        has_records: bool,
    ):
        self.log_file = log_file
        self.log_path = log_path
        self.store = store
        self.last_entry = last_entry
        self.today = today
        self._has_records = has_records

    @classmethod
    def init(
        cls,
        data_dir: Union[str, Path],
        store: SnapshotStore,
        today: Optional[date] = None,
    ) -> "Bookkeeper":
        """Open (or create) the log and find the last recorded day"""
        log_path = Path(data_dir) / LOG_FILENAME
        today = today or local_today()

        try:
            # Reads may seek anywhere; writes always land at the end
            log_file = open(log_path, "a+b")
        except OSError as e:
            raise DodoIOError(log_path, e.strerror or str(e)) from e

        try:
            size = log_file.seek(0, os.SEEK_END)
            if size == 0:
                logger.debug("Bookkeeping log is empty, starting fresh")
                return cls(log_file, log_path, store, today, today, has_records=False)

            if size % RECORD_LEN != 0:
                raise InvalidLogError(log_path, size, RECORD_LEN)

            log_file.seek(size - RECORD_LEN)
            record = log_file.read(RECORD_LEN)
            try:
                last_entry = decode_record(record)
            except ValueError as e:
                raise MalformedLogRecordError(log_path, record) from e
        except OSError as e:
            log_file.close()
            raise DodoIOError(log_path, e.strerror or str(e)) from e
        except Exception:
            log_file.close()
            raise

        logger.debug(f"Last bookkeeping entry: {last_entry.isoformat()}")
        return cls(log_file, log_path, store, last_entry, today, has_records=True)

    # ========================================
    # LOG OPERATIONS
    # ========================================

    def append_to_today(self, tasks: TaskSet) -> None:
        """Record today in the log (once) and save `tasks` as today's snapshot"""
        if self.last_entry != self.today or not self._has_records:
            try:
                self.log_file.write(encode_record(self.today))
                self.log_file.flush()
            except OSError as e:
                raise DodoIOError(self.log_path, e.strerror or str(e)) from e
            logger.info(f"📝 Recorded {self.today.isoformat()} in bookkeeping log")
            self.last_entry = self.today
            self._has_records = True

        self.store.save(tasks, self.today)

    def last_entry_taskset(self) -> TaskSet:
        """The snapshot of the most recent recorded day"""
        return self.store.load(self.last_entry)

    def entries(self) -> List[date]:
        """Every recorded day, oldest first"""
        try:
            self.log_file.seek(0)
            raw = self.log_file.read()
        except OSError as e:
            raise DodoIOError(self.log_path, e.strerror or str(e)) from e

        days = []
        for start in range(0, len(raw) - len(raw) % RECORD_LEN, RECORD_LEN):
            record = raw[start:start + RECORD_LEN]
            try:
                days.append(decode_record(record))
            except ValueError as e:
                raise MalformedLogRecordError(self.log_path, record) from e
        return days

    # ========================================
    # LIFECYCLE
    # ========================================

    def close(self) -> None:
        self.log_file.close()

    def __enter__(self) -> "Bookkeeper":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
