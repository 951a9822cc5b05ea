"""Daily streak continuity."""

from datetime import date, timedelta
from enum import StrEnum

from language_coach.models.progress import parse_day


class StreakState(StrEnum):
    """A streak is dormant at zero and active otherwise."""

    DORMANT = "dormant"
    ACTIVE = "active"

    @classmethod
    def of(cls, streak: int) -> "StreakState":
        return cls.ACTIVE if streak >= 1 else cls.DORMANT


def compute_streak(
    today: date,
    streak_last_date: date | str | None,
    current_streak: int | None,
) -> int:
    """Return the streak after an XP-awarding activity on ``today``.

    Same day keeps the streak, the day after extends it by one, and any other
    gap (or no usable prior date) restarts it at 1. Malformed prior dates are
    treated as absent. Decay is only discovered here, on the next award.
    """
    last = parse_day(streak_last_date)
    streak = max(current_streak or 0, 0)

    if last == today:
        return streak
    if last == today - timedelta(days=1):
        return streak + 1
    return 1
