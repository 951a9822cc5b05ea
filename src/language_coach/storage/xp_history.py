"""Per-learner XP event log."""

import fcntl
import json
import os
import tempfile
from datetime import date, datetime
from pathlib import Path

from language_coach.storage.progress import validate_user_id


def _history_path(history_dir: Path, user_id: str) -> Path:
    return history_dir / f"{validate_user_id(user_id)}.json"


def append_xp_event(
    history_dir: Path,
    user_id: str,
    amount: int,
    source: str,
    total_after: int,
    day: date,
) -> None:
    """Append one XP award to the learner's history file."""
    history_path = _history_path(history_dir, user_id)

    lock_path = history_dir / f"{user_id}.json.lock"
    with open(lock_path, "w") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)

        if history_path.exists():
            data = json.loads(history_path.read_text())
        else:
            data = {"events": []}

        data["events"].append({
            "amount": amount,
            "source": source,
            "total_after": total_after,
            "date": day.isoformat(),
            "created_at": datetime.now().isoformat(),
        })
        with tempfile.NamedTemporaryFile(
            "w", dir=history_dir, delete=False, suffix=".json"
        ) as tmp:
            json.dump(data, tmp, indent=2)
        os.replace(tmp.name, history_path)


def read_xp_history(history_dir: Path, user_id: str) -> dict:
    """Read a learner's XP history. Returns empty history if not found."""
    history_path = _history_path(history_dir, user_id)
    if not history_path.exists():
        return {"events": []}
    return json.loads(history_path.read_text())
