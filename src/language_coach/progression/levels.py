"""Level threshold table and XP-to-level lookup."""

import functools
from collections.abc import Sequence
from pathlib import Path

import structlog
import yaml

from language_coach.errors import InvalidInput
from language_coach.models.progress import LevelInfo, LevelThreshold
from language_coach.rounding import clamp, percent_half_up

logger = structlog.get_logger()

MAX_LEVEL = "Max"

LEVEL_THRESHOLDS: tuple[LevelThreshold, ...] = (
    LevelThreshold(level="A1", name="Beginner", min_xp=0),
    LevelThreshold(level="A1+", name="Elementary", min_xp=200),
    LevelThreshold(level="A2", name="Pre-Intermediate", min_xp=500),
    LevelThreshold(level="B1", name="Intermediate", min_xp=1000),
    LevelThreshold(level="B1+", name="Upper-Intermediate", min_xp=1800),
    LevelThreshold(level="B2", name="Advanced", min_xp=2800),
    LevelThreshold(level="C1", name="Proficiency", min_xp=4000),
    LevelThreshold(level="C2", name="Master", min_xp=5500),
)


def validate_thresholds(thresholds: Sequence[LevelThreshold]) -> tuple[LevelThreshold, ...]:
    """Check that a table is non-empty, starts at 0 XP and strictly increases.

    Raises:
        InvalidInput: If the table breaks any of those rules.
    """
    table = tuple(thresholds)
    if not table:
        raise InvalidInput("level table must have at least one entry")
    if table[0].min_xp != 0:
        raise InvalidInput(f"first level must start at 0 XP, got {table[0].min_xp}")
    for prev, cur in zip(table, table[1:]):
        if cur.min_xp <= prev.min_xp:
            raise InvalidInput(
                f"level {cur.level!r} min_xp {cur.min_xp} does not exceed "
                f"{prev.level!r} min_xp {prev.min_xp}"
            )
    return table


def load_level_thresholds(path: Path | None) -> tuple[LevelThreshold, ...]:
    """Load a level table from YAML, falling back to the built-in table.

    The file holds a ``levels:`` list of ``{level, name, min_xp}`` mappings.
    """
    if path is None or not path.exists():
        return LEVEL_THRESHOLDS
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    table = validate_thresholds([LevelThreshold(**entry) for entry in data.get('levels', [])])
    logger.info("level_table_loaded", path=str(path), levels=len(table))
    return table


@functools.lru_cache
def get_level_thresholds(path: Path | None = None) -> tuple[LevelThreshold, ...]:
    """Cached variant of :func:`load_level_thresholds`."""
    return load_level_thresholds(path)


def _current_index(xp: int, thresholds: Sequence[LevelThreshold]) -> int:
    index = 0
    for i, threshold in enumerate(thresholds):
        if xp >= threshold.min_xp:
            index = i
        else:
            break
    return index


def level_from_xp(
    xp: int,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> LevelInfo:
    """Map an XP total to its level and the progress towards the next one.

    The highest tier whose ``min_xp`` is at most ``xp`` wins; XP below the
    first tier clamps to it. Never raises for a non-empty table.

    Args:
        xp: Total experience points.
        thresholds: Level table ordered by strictly increasing ``min_xp``.

    Returns:
        LevelInfo with ``progress_to_next`` in [0, 100].
    """
    index = _current_index(xp, thresholds)
    current = thresholds[index]

    if index + 1 < len(thresholds):
        nxt = thresholds[index + 1]
        progress = clamp(percent_half_up(xp - current.min_xp, nxt.min_xp - current.min_xp))
        next_level = nxt.level
    else:
        progress = 100
        next_level = MAX_LEVEL

    return LevelInfo(
        level=current.level,
        name=current.name,
        min_xp=current.min_xp,
        progress_to_next=progress,
        next_level=next_level,
    )


def find_threshold(
    level: str,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> LevelThreshold:
    """Look up a tier by its level code."""
    for threshold in thresholds:
        if threshold.level == level:
            return threshold
    raise InvalidInput(f"unknown level {level!r}")
