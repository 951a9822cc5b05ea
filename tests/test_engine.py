"""Tests for the pure progression engine."""

from datetime import date

import pytest

from language_coach.errors import InvalidInput
from language_coach.models.progress import ActivityType, UserProgress, XPPolicy
from language_coach.progression.engine import award_xp, complete_lesson, record_activity

TODAY = date(2026, 3, 10)
YESTERDAY = date(2026, 3, 9)


class TestAwardXP:
    def test_first_award(self):
        award = award_xp(UserProgress(), 50, TODAY)
        assert award.amount == 50
        assert award.progress.xp == 50
        assert award.progress.streak == 1
        assert award.progress.streak_last_date == TODAY
        assert award.level.level == "A1"
        assert not award.leveled_up

    def test_level_up(self):
        award = award_xp(UserProgress(xp=180), 50, TODAY)
        assert award.progress.xp == 230
        assert award.previous_level == "A1"
        assert award.level.level == "A1+"
        assert award.leveled_up

    def test_streak_continues_from_yesterday(self):
        progress = UserProgress(xp=100, streak=4, streak_last_date=YESTERDAY)
        assert award_xp(progress, 10, TODAY).progress.streak == 5

    def test_second_award_same_day(self):
        first = award_xp(UserProgress(streak=2, streak_last_date=YESTERDAY), 10, TODAY)
        second = award_xp(first.progress, 10, TODAY)
        assert first.progress.streak == second.progress.streak == 3
        assert second.progress.xp == 20

    def test_input_not_mutated(self):
        progress = UserProgress(xp=100)
        award_xp(progress, 25, TODAY)
        assert progress.xp == 100
        assert progress.streak_last_date is None

    def test_zero_amount_allowed(self):
        assert award_xp(UserProgress(xp=5), 0, TODAY).progress.xp == 5

    def test_zero_amount_leaves_streak(self):
        progress = UserProgress(xp=5, streak=2, streak_last_date=date(2026, 3, 7))
        award = award_xp(progress, 0, TODAY)
        assert award.progress.streak == 2
        assert award.progress.streak_last_date == date(2026, 3, 7)

    def test_zero_amount_does_not_start_streak(self):
        award = award_xp(UserProgress(), 0, TODAY)
        assert award.progress.streak == 0
        assert award.progress.streak_last_date is None

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidInput):
            award_xp(UserProgress(), -1, TODAY)


class TestCompleteLesson:
    def test_passed_lesson_counts(self):
        result = complete_lesson(UserProgress(), 6, 10, TODAY)
        assert result.lesson.passed
        assert result.first_pass
        assert result.award.progress.xp == 80
        assert result.award.progress.lessons_completed == 1

    def test_failed_lesson_not_counted(self):
        result = complete_lesson(UserProgress(), 5, 10, TODAY)
        assert not result.lesson.passed
        assert result.award.progress.xp == 50
        assert result.award.progress.lessons_completed == 0

    def test_repeat_pass_not_counted_twice(self):
        progress = UserProgress(xp=125, lessons_completed=1)
        result = complete_lesson(progress, 10, 10, TODAY, previously_passed=True)
        assert not result.first_pass
        assert result.award.progress.lessons_completed == 1
        assert result.award.progress.xp == 250

    def test_unrewarded_fail_leaves_streak(self):
        progress = UserProgress(streak=3, streak_last_date=YESTERDAY)
        policy = XPPolicy(award_base_on_fail=False)
        result = complete_lesson(progress, 2, 10, TODAY, policy=policy)
        assert result.award.amount == 0
        assert result.award.progress.streak == 3
        assert result.award.progress.streak_last_date == YESTERDAY

    def test_policy_applied(self):
        policy = XPPolicy(lesson_complete=10, quiz_perfect=5)
        result = complete_lesson(UserProgress(), 3, 3, TODAY, policy=policy)
        assert result.award.progress.xp == 15

    def test_zero_questions_rejected(self):
        with pytest.raises(InvalidInput):
            complete_lesson(UserProgress(), 0, 0, TODAY)


class TestRecordActivity:
    def test_chat_counts_session(self):
        award = record_activity(UserProgress(), ActivityType.CHAT, TODAY)
        assert award.progress.xp == 10
        assert award.progress.chat_sessions == 1

    def test_writing(self):
        award = record_activity(UserProgress(chat_sessions=2), ActivityType.WRITING, TODAY)
        assert award.progress.xp == 20
        assert award.progress.chat_sessions == 2
        assert award.progress.streak == 1
