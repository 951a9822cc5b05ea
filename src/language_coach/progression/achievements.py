"""Achievement catalog and evaluation."""

from collections.abc import Sequence

from language_coach.models.achievement import Achievement, AchievementStatus
from language_coach.models.progress import UserProgress
from language_coach.progression.levels import find_threshold, level_from_xp


def _reached_level(level: str):
    min_xp = find_threshold(level).min_xp
    return lambda p: level_from_xp(p.xp).min_xp >= min_xp


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first-lesson", name="First Lesson", emoji="📖",
        description="Complete your first lesson",
        predicate=lambda p: p.lessons_completed >= 1,
    ),
    Achievement(
        id="streak-3", name="3-Day Streak", emoji="🔥",
        description="Practice 3 days in a row",
        predicate=lambda p: p.streak >= 3,
    ),
    Achievement(
        id="streak-7", name="7-Day Streak", emoji="🔥",
        description="Practice 7 days in a row",
        predicate=lambda p: p.streak >= 7,
    ),
    Achievement(
        id="streak-30", name="30-Day Streak", emoji="💪",
        description="Practice 30 days in a row",
        predicate=lambda p: p.streak >= 30,
    ),
    Achievement(
        id="xp-100", name="Getting Started", emoji="⭐",
        description="Earn 100 XP",
        predicate=lambda p: p.xp >= 100,
    ),
    Achievement(
        id="xp-500", name="Rising Star", emoji="🌟",
        description="Earn 500 XP",
        predicate=lambda p: p.xp >= 500,
    ),
    Achievement(
        id="xp-1000", name="XP Champion", emoji="🏆",
        description="Earn 1,000 XP",
        predicate=lambda p: p.xp >= 1000,
    ),
    Achievement(
        id="lessons-5", name="Scholar", emoji="📚",
        description="Complete 5 lessons",
        predicate=lambda p: p.lessons_completed >= 5,
    ),
    Achievement(
        id="lessons-10", name="Dedicated Learner", emoji="🎓",
        description="Complete 10 lessons",
        predicate=lambda p: p.lessons_completed >= 10,
    ),
    Achievement(
        id="level-a2", name="Level Up!", emoji="🚀",
        description="Reach A2 level",
        predicate=_reached_level("A2"),
    ),
    Achievement(
        id="level-b1", name="Intermediate!", emoji="💎",
        description="Reach B1 level",
        predicate=_reached_level("B1"),
    ),
    Achievement(
        id="chatter", name="Chatter", emoji="💬",
        description="Have 10 AI conversations",
        predicate=lambda p: p.chat_sessions >= 10,
    ),
)


def evaluate_achievements(
    progress: UserProgress,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[Achievement]:
    """Return the earned subset of ``catalog``, in catalog order."""
    return [a for a in catalog if a.is_earned(progress)]


def achievement_statuses(
    progress: UserProgress,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[AchievementStatus]:
    """Every catalog entry with its earned flag, for listing screens."""
    return [
        AchievementStatus(
            id=a.id,
            name=a.name,
            description=a.description,
            emoji=a.emoji,
            earned=a.is_earned(progress),
        )
        for a in catalog
    ]


def newly_earned(
    before: UserProgress,
    after: UserProgress,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[Achievement]:
    """Achievements ``after`` has earned that ``before`` had not."""
    already = {a.id for a in evaluate_achievements(before, catalog)}
    return [a for a in evaluate_achievements(after, catalog) if a.id not in already]
