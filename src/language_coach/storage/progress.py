"""Learner progress persistence (JSON + fcntl.flock + atomic write)."""

import fcntl
import json
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from language_coach.errors import InvalidInput
from language_coach.models.progress import ProgressRecord

_USER_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def validate_user_id(user_id: str) -> str:
    if not _USER_ID.fullmatch(user_id):
        raise InvalidInput(f"invalid user id {user_id!r}")
    return user_id


def get_progress_path(progress_dir: Path, user_id: str) -> Path:
    return progress_dir / f"{validate_user_id(user_id)}.json"


@contextmanager
def _user_lock(progress_dir: Path, user_id: str, mode: int) -> Iterator[None]:
    lock_path = progress_dir / f"{validate_user_id(user_id)}.lock"
    with open(lock_path, "w") as lock_file:
        fcntl.flock(lock_file, mode)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def _read(progress_dir: Path, user_id: str) -> ProgressRecord:
    path = get_progress_path(progress_dir, user_id)
    if not path.exists():
        return ProgressRecord(user_id=user_id)
    return ProgressRecord.model_validate(json.loads(path.read_text()))


def _write(progress_dir: Path, record: ProgressRecord) -> None:
    path = get_progress_path(progress_dir, record.user_id)
    record.updated_at = datetime.now()
    with tempfile.NamedTemporaryFile("w", dir=progress_dir, delete=False, suffix=".json") as tmp:
        json.dump(record.model_dump(mode="json"), tmp, indent=2)
    os.replace(tmp.name, path)


def load_progress(progress_dir: Path, user_id: str) -> ProgressRecord:
    """Load a learner's record, or a fresh one if none is stored yet."""
    with _user_lock(progress_dir, user_id, fcntl.LOCK_SH):
        return _read(progress_dir, user_id)


def save_progress(progress_dir: Path, record: ProgressRecord) -> None:
    with _user_lock(progress_dir, record.user_id, fcntl.LOCK_EX):
        _write(progress_dir, record)


def update_progress(
    progress_dir: Path,
    user_id: str,
    fn: Callable[[ProgressRecord], ProgressRecord],
) -> ProgressRecord:
    """Read, transform and write a record under one exclusive per-user lock.

    Concurrent updates for the same learner are serialized, so no XP or
    streak change is lost between the read and the write.
    """
    with _user_lock(progress_dir, user_id, fcntl.LOCK_EX):
        record = fn(_read(progress_dir, user_id))
        _write(progress_dir, record)
        return record
