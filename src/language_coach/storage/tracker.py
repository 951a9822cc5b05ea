"""Read-compute-write orchestration of the progression engine."""

from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime
from pathlib import Path

import structlog

from language_coach.models.achievement import Achievement
from language_coach.models.progress import (
    ActivityType,
    LessonCompletion,
    LessonRecord,
    LevelThreshold,
    ProgressRecord,
    XPAward,
    XPPolicy,
)
from language_coach.progression.achievements import ACHIEVEMENTS, newly_earned
from language_coach.progression.engine import award_xp, complete_lesson, record_activity
from language_coach.progression.levels import LEVEL_THRESHOLDS
from language_coach.progression.xp import DEFAULT_POLICY
from language_coach.storage.progress import load_progress, update_progress
from language_coach.storage.xp_history import append_xp_event

logger = structlog.get_logger()


def utc_today() -> date:
    return datetime.now(UTC).date()


class ProgressTracker:
    """Applies awards to stored learner progress.

    Every award runs the pure engine inside one locked read-modify-write of
    the learner's record, then appends the XP event to the history log.

    Args:
        progress_dir: Directory of per-learner progress records.
        history_dir: Directory of per-learner XP history files.
        policy: XP amounts and pass threshold.
        thresholds: Level table.
        catalog: Achievements to report as newly earned.
        clock: Returns the current day; defaults to the UTC date.
    """

    def __init__(
        self,
        progress_dir: Path,
        history_dir: Path,
        policy: XPPolicy = DEFAULT_POLICY,
        thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
        catalog: Sequence[Achievement] = ACHIEVEMENTS,
        clock: Callable[[], date] = utc_today,
    ):
        self.progress_dir = progress_dir
        self.history_dir = history_dir
        self.policy = policy
        self.thresholds = thresholds
        self.catalog = catalog
        self.clock = clock

    def load(self, user_id: str) -> ProgressRecord:
        return load_progress(self.progress_dir, user_id)

    def _apply(self, record: ProgressRecord, award: XPAward) -> ProgressRecord:
        gained = newly_earned(record.snapshot(), award.progress, self.catalog)
        if award.leveled_up:
            logger.info(
                "level_up",
                user_id=record.user_id,
                previous=award.previous_level,
                level=award.level.level,
            )
        for achievement in gained:
            logger.info("achievement_earned", user_id=record.user_id, achievement=achievement.id)
        return record.model_copy(update={
            **award.progress.model_dump(),
            "level": award.level.level,
        })

    def _log_event(self, user_id: str, award: XPAward, source: str, today: date) -> None:
        append_xp_event(
            self.history_dir,
            user_id,
            amount=award.amount,
            source=source,
            total_after=award.progress.xp,
            day=today,
        )
        logger.info(
            "xp_awarded",
            user_id=user_id,
            amount=award.amount,
            source=source,
            xp=award.progress.xp,
            streak=award.progress.streak,
        )

    def award(self, user_id: str, amount: int, source: str, today: date | None = None) -> XPAward:
        """Award a fixed amount of XP from ``source``."""
        today = today or self.clock()
        result: XPAward | None = None

        def apply(record: ProgressRecord) -> ProgressRecord:
            nonlocal result
            result = award_xp(record.snapshot(), amount, today, self.thresholds)
            return self._apply(record, result)

        update_progress(self.progress_dir, user_id, apply)
        self._log_event(user_id, result, source, today)
        return result

    def record_activity(
        self, user_id: str, activity: ActivityType, today: date | None = None
    ) -> XPAward:
        """Award a practice activity."""
        today = today or self.clock()
        result: XPAward | None = None

        def apply(record: ProgressRecord) -> ProgressRecord:
            nonlocal result
            result = record_activity(
                record.snapshot(), activity, today, self.policy, self.thresholds
            )
            return self._apply(record, result)

        update_progress(self.progress_dir, user_id, apply)
        self._log_event(user_id, result, activity.value, today)
        return result

    def complete_lesson(
        self,
        user_id: str,
        lesson_id: str,
        correct: int,
        total: int,
        today: date | None = None,
    ) -> LessonCompletion:
        """Award a lesson quiz and store the lesson's outcome."""
        today = today or self.clock()
        result: LessonCompletion | None = None

        def apply(record: ProgressRecord) -> ProgressRecord:
            nonlocal result
            previous = record.lessons.get(lesson_id)
            result = complete_lesson(
                record.snapshot(),
                correct,
                total,
                today,
                previously_passed=previous is not None and previous.passed,
                policy=self.policy,
                thresholds=self.thresholds,
            )
            updated = self._apply(record, result.award)
            updated.lessons = {
                **record.lessons,
                lesson_id: LessonRecord(
                    passed=result.lesson.passed or (previous is not None and previous.passed),
                    quiz_score=result.lesson.percentage,
                    quiz_score_raw=f"{correct}/{total}",
                    completed_at=datetime.now(UTC),
                ),
            }
            return updated

        update_progress(self.progress_dir, user_id, apply)
        self._log_event(user_id, result.award, f"lesson:{lesson_id}", today)
        return result
