"""Pure progression engine: applies awards to a progress snapshot.

Nothing here touches storage or the clock. Each function takes the prior
``UserProgress`` plus ``today`` and returns a new snapshot with the derived
level information; callers persist the result.
"""

from collections.abc import Sequence
from datetime import date

import structlog

from language_coach.errors import InvalidInput
from language_coach.models.progress import (
    ActivityType,
    LessonCompletion,
    LevelThreshold,
    UserProgress,
    XPAward,
    XPPolicy,
)
from language_coach.progression.levels import LEVEL_THRESHOLDS, level_from_xp
from language_coach.progression.streak import compute_streak
from language_coach.progression.xp import DEFAULT_POLICY, activity_xp, compute_lesson_xp

logger = structlog.get_logger()


def award_xp(
    progress: UserProgress,
    amount: int,
    today: date,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> XPAward:
    """Add ``amount`` XP and advance the streak for an activity on ``today``.

    A zero award leaves the streak and its last date untouched.

    Raises:
        InvalidInput: If ``amount`` is negative.
    """
    if amount < 0:
        raise InvalidInput(f"XP amount must be non-negative, got {amount}")

    before = level_from_xp(progress.xp, thresholds)
    changes = {"xp": progress.xp + amount}
    if amount > 0:
        changes["streak"] = compute_streak(today, progress.streak_last_date, progress.streak)
        changes["streak_last_date"] = today
    updated = progress.model_copy(update=changes)
    after = level_from_xp(updated.xp, thresholds)

    logger.debug(
        "xp_applied",
        amount=amount,
        xp=updated.xp,
        streak=updated.streak,
        level=after.level,
    )
    return XPAward(
        amount=amount,
        progress=updated,
        level=after,
        previous_level=before.level,
        leveled_up=after.min_xp > before.min_xp,
    )


def complete_lesson(
    progress: UserProgress,
    correct: int,
    total: int,
    today: date,
    previously_passed: bool = False,
    policy: XPPolicy = DEFAULT_POLICY,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> LessonCompletion:
    """Award a lesson quiz and count the lesson once it is first passed.

    Args:
        progress: Snapshot before the quiz.
        correct: Correct answers.
        total: Questions in the quiz.
        today: Day the quiz was finished.
        previously_passed: Whether this lesson was already passed before,
            in which case ``lessons_completed`` is left alone.
        policy: XP amounts and pass threshold.
        thresholds: Level table.
    """
    lesson = compute_lesson_xp(correct, total, policy)
    award = award_xp(progress, lesson.xp_awarded, today, thresholds)

    first_pass = lesson.passed and not previously_passed
    if first_pass:
        award.progress = award.progress.model_copy(
            update={"lessons_completed": award.progress.lessons_completed + 1}
        )
    return LessonCompletion(lesson=lesson, award=award, first_pass=first_pass)


def record_activity(
    progress: UserProgress,
    activity: ActivityType,
    today: date,
    policy: XPPolicy = DEFAULT_POLICY,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> XPAward:
    """Award XP for a practice activity. Chat sessions are also counted."""
    award = award_xp(progress, activity_xp(activity, policy), today, thresholds)
    if activity == ActivityType.CHAT:
        award.progress = award.progress.model_copy(
            update={"chat_sessions": award.progress.chat_sessions + 1}
        )
    return award
