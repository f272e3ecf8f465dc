# tests/test_bookkeeper.py

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from dodo.bookkeeper import RECORD_LEN, Bookkeeper, decode_record, encode_record
from dodo.errors import InvalidLogError, MalformedLogRecordError, SnapshotMissingError
from dodo.schema import Task, TaskSet
from dodo.storage import SnapshotStore

from .conftest import TODAY, YESTERDAY, write_log


def test_record_layout() -> None:
    record = encode_record(TODAY)
    assert record == b"2024-03-15\n"
    assert len(record) == RECORD_LEN == 11
    assert decode_record(record) == TODAY


@pytest.mark.parametrize("record", [b"2024-03-15 ", b"2024-13-15\n", b"not-a-date\n", b"\xff" * 11])
def test_decode_record_rejects_malformed(record: bytes) -> None:
    with pytest.raises(ValueError):
        decode_record(record)


def test_init_on_fresh_install(data_dir: Path, store: SnapshotStore) -> None:
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        assert bk.last_entry == TODAY
        assert bk.entries() == []
    assert (data_dir / "bookkeeper").exists()


def test_init_reads_last_record(data_dir: Path, store: SnapshotStore) -> None:
    write_log(data_dir, YESTERDAY - timedelta(days=3), YESTERDAY)
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        assert bk.last_entry == YESTERDAY


@pytest.mark.parametrize("size", [1, 10, 12, 21, 23])
def test_init_rejects_log_of_wrong_size(data_dir: Path, store: SnapshotStore, size: int) -> None:
    (data_dir / "bookkeeper").write_bytes(b"x" * size)
    with pytest.raises(InvalidLogError) as excinfo:
        Bookkeeper.init(data_dir, store, today=TODAY)
    assert excinfo.value.size == size
    assert "multiple of 11" in str(excinfo.value)


def test_init_rejects_malformed_last_record(data_dir: Path, store: SnapshotStore) -> None:
    (data_dir / "bookkeeper").write_bytes(b"2024-03-14\n" + b"garbage!!!\n")
    with pytest.raises(MalformedLogRecordError):
        Bookkeeper.init(data_dir, store, today=TODAY)


def test_append_to_today_on_fresh_install_records_today(bookkeeper: Bookkeeper, store: SnapshotStore) -> None:
    tasks = TaskSet(tasks=[Task(name="first", creation_date=TODAY)])
    bookkeeper.append_to_today(tasks)

    assert bookkeeper.entries() == [TODAY]
    assert store.load(TODAY) == tasks


def test_append_to_today_is_idempotent_by_date(
    data_dir: Path, bookkeeper: Bookkeeper, store: SnapshotStore
) -> None:
    bookkeeper.append_to_today(TaskSet(tasks=[Task(name="one", creation_date=TODAY)]))
    bookkeeper.append_to_today(TaskSet(tasks=[Task(name="two", creation_date=TODAY)]))

    assert (data_dir / "bookkeeper").stat().st_size == RECORD_LEN
    # Snapshot is overwritten every time
    assert [t.name for t in store.load(TODAY).tasks] == ["two"]


def test_append_to_today_after_previous_day(data_dir: Path, store: SnapshotStore) -> None:
    log_path = write_log(data_dir, YESTERDAY)
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        bk.append_to_today(TaskSet())
        assert bk.last_entry == TODAY
        assert bk.entries() == [YESTERDAY, TODAY]
    assert log_path.read_bytes() == b"2024-03-14\n2024-03-15\n"


def test_last_entry_taskset(data_dir: Path, store: SnapshotStore) -> None:
    write_log(data_dir, YESTERDAY)
    tasks = TaskSet(tasks=[Task(name="from yesterday", creation_date=YESTERDAY)])
    store.save(tasks, YESTERDAY)

    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        assert bk.last_entry_taskset() == tasks


def test_last_entry_taskset_missing_snapshot(data_dir: Path, store: SnapshotStore) -> None:
    write_log(data_dir, YESTERDAY)
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        with pytest.raises(SnapshotMissingError) as excinfo:
            bk.last_entry_taskset()
    assert excinfo.value.day == YESTERDAY


def test_log_is_closed_on_exit(data_dir: Path, store: SnapshotStore) -> None:
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        pass
    assert bk.log_file.closed


def test_log_is_closed_on_error(data_dir: Path, store: SnapshotStore) -> None:
    with pytest.raises(RuntimeError):
        with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
            raise RuntimeError("boom")
    assert bk.log_file.closed
