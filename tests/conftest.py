# tests/conftest.py

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from dodo.bookkeeper import Bookkeeper
from dodo.manager import DailyManager
from dodo.storage import SnapshotStore

from .fakes import FakeEditor

TODAY = date(2024, 3, 15)
YESTERDAY = TODAY - timedelta(days=1)


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dodo"
    path.mkdir()
    return path


@pytest.fixture()
def store(data_dir: Path) -> SnapshotStore:
    return SnapshotStore(data_dir)


@pytest.fixture()
def bookkeeper(data_dir: Path, store: SnapshotStore):
    """
    Bookkeeper over an empty log, pinned to TODAY so tests never depend on
    the wall clock.
    """
    with Bookkeeper.init(data_dir, store, today=TODAY) as bk:
        yield bk


@pytest.fixture()
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture()
def manager(bookkeeper: Bookkeeper, store: SnapshotStore, editor: FakeEditor) -> DailyManager:
    return DailyManager(bookkeeper, store, editor=editor)


def write_log(data_dir: Path, *days: date) -> Path:
    """Write a bookkeeping log containing exactly `days`."""
    log_path = data_dir / "bookkeeper"
    log_path.write_bytes(b"".join(f"{d.isoformat()}\n".encode("ascii") for d in days))
    return log_path
