"""XP awards for lesson quizzes and practice activities."""

from language_coach.errors import InvalidInput
from language_coach.models.progress import ActivityType, LessonXP, XPPolicy
from language_coach.rounding import percent_half_up

DEFAULT_POLICY = XPPolicy()


def compute_lesson_xp(
    correct: int,
    total: int,
    policy: XPPolicy = DEFAULT_POLICY,
) -> LessonXP:
    """Work out the XP for a finished lesson quiz.

    Every completed lesson earns ``policy.lesson_complete``. On top of that a
    perfect quiz earns ``quiz_perfect`` and a passing one ``quiz_pass``.
    With ``award_base_on_fail`` switched off a failed quiz earns nothing.

    Args:
        correct: Number of correctly answered questions.
        total: Number of questions in the quiz.
        policy: XP amounts and pass threshold.

    Raises:
        InvalidInput: If ``total`` is not positive or ``correct`` is outside
            ``[0, total]``.
    """
    if total <= 0:
        raise InvalidInput(f"quiz must have at least one question, got total={total}")
    if correct < 0 or correct > total:
        raise InvalidInput(f"correct={correct} is outside [0, {total}]")

    percentage = percent_half_up(correct, total)
    passed = percentage >= policy.pass_threshold
    perfect = correct == total

    if perfect:
        bonus = policy.quiz_perfect
    elif passed:
        bonus = policy.quiz_pass
    else:
        bonus = 0

    base = policy.lesson_complete if passed or policy.award_base_on_fail else 0
    return LessonXP(
        percentage=percentage,
        passed=passed,
        perfect=perfect,
        bonus=bonus,
        xp_awarded=base + bonus,
    )


def activity_xp(activity: ActivityType, policy: XPPolicy = DEFAULT_POLICY) -> int:
    """XP for a single practice activity."""
    amounts = {
        ActivityType.SPEAKING: policy.speaking_practice,
        ActivityType.WRITING: policy.writing_practice,
        ActivityType.CHAT: policy.chat_session,
        ActivityType.PRONUNCIATION: policy.pronunciation,
    }
    return amounts[activity]
