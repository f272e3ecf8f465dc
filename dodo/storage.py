"""
dodo - Snapshot Storage
=======================
One JSON snapshot of the TaskSet per calendar day, named YYYY-MM-DD.json,
inside the per-user data directory.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .errors import (
    CouldNotCreateFolderError,
    DodoIOError,
    NoValidHomeDirError,
    SnapshotDecodeError,
    SnapshotMissingError,
)
from .formatting import snapshot_filename
from .schema import TaskSet

logger = logging.getLogger(__name__)

APP_DIR_NAME = "dodo"
README_NAME = "README"
README_TEXT = "Please do not manually edit any files in this folder"


class SnapshotStore:
    """Saves and loads per-day task list snapshots"""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path_for(self, day: date) -> Path:
        return self.data_dir / snapshot_filename(day)

    def exists(self, day: date) -> bool:
        return self.path_for(day).exists()

    def save(self, task_set: TaskSet, day: date) -> None:
        """Write the snapshot for `day`, replacing any existing one"""
        file_path = self.path_for(day)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(task_set.model_dump(mode="json"), f, indent=2)
        except OSError as e:
            raise DodoIOError(file_path, e.strerror or str(e)) from e

        logger.info(f"✅ Saved {len(task_set)} task(s) for {day.isoformat()}")

    def load(self, day: date) -> TaskSet:
        file_path = self.path_for(day)
        if not file_path.exists():
            raise SnapshotMissingError(day, file_path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotDecodeError(file_path, str(e)) from e
        except OSError as e:
            raise DodoIOError(file_path, e.strerror or str(e)) from e

        try:
            task_set = TaskSet.model_validate(data)
        except ValidationError as e:
            raise SnapshotDecodeError(file_path, f"{e.error_count()} invalid field(s)") from e

        logger.debug(f"📂 Loaded {len(task_set)} task(s) for {day.isoformat()}")
        return task_set


# ========================================
# DATA DIRECTORY
# ========================================

def default_data_dir() -> Path:
    """$XDG_DATA_HOME/dodo, falling back to ~/.local/share/dodo"""
    xdg = os.environ.get("XDG_DATA_HOME", "").strip()
    if xdg:
        return Path(xdg) / APP_DIR_NAME

    try:
        home = Path.home()
    except RuntimeError:
        raise NoValidHomeDirError() from None
    # expanduser leaves "~" alone when no home can be determined
    if str(home) in ("", "~"):
        raise NoValidHomeDirError()
    return home / ".local" / "share" / APP_DIR_NAME


def prepare_data_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the data directory and create it on first use"""
    data_dir = Path(override).expanduser() if override else default_data_dir()
    if data_dir.is_dir():
        return data_dir

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        (data_dir / README_NAME).write_text(README_TEXT, encoding="utf-8")
    except OSError as e:
        raise CouldNotCreateFolderError(data_dir, e.strerror or str(e)) from e

    logger.info(f"📁 Data directory initial setup complete: {data_dir}")
    return data_dir
