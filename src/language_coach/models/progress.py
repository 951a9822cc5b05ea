"""Progress, level and XP models."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def parse_day(value: object) -> date | None:
    """Coerce a stored day value into a ``date``.

    Accepts ``date``/``datetime`` objects and ISO ``YYYY-MM-DD`` strings (a
    trailing time part is ignored). Anything else, including malformed
    strings, yields ``None``.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class UserProgress(BaseModel):
    """Snapshot of a learner's persisted progress counters.

    Field names are snake_case; the camelCase names used by stored documents
    (``streakLastDate``, ``lessonsCompleted``) are accepted as aliases.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    xp: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    streak_last_date: date | None = None
    lessons_completed: int = Field(default=0, ge=0)
    chat_sessions: int = Field(default=0, ge=0)

    @field_validator("xp", "streak", "lessons_completed", "chat_sessions", mode="before")
    @classmethod
    def _missing_as_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("streak_last_date", mode="before")
    @classmethod
    def _lenient_day(cls, value: object) -> date | None:
        return parse_day(value)


class LevelThreshold(BaseModel):
    """Minimum XP required to reach a named proficiency tier."""

    model_config = ConfigDict(frozen=True)

    level: str
    name: str
    min_xp: int = Field(ge=0)


class LevelInfo(BaseModel):
    """Level derived from an XP total. Never persisted."""

    level: str
    name: str
    min_xp: int
    progress_to_next: int = Field(ge=0, le=100)
    next_level: str  # "Max" on the top tier


class XPPolicy(BaseModel):
    """XP amounts awarded for lessons and practice activities."""

    lesson_complete: int = Field(default=50, ge=0)
    quiz_perfect: int = Field(default=75, ge=0)
    quiz_pass: int = Field(default=30, ge=0)
    pass_threshold: int = Field(default=60, ge=0, le=100)
    award_base_on_fail: bool = True
    speaking_practice: int = Field(default=15, ge=0)
    writing_practice: int = Field(default=20, ge=0)
    chat_session: int = Field(default=10, ge=0)
    pronunciation: int = Field(default=15, ge=0)


class ActivityType(StrEnum):
    """Practice activities that award XP outside of lessons."""

    SPEAKING = "speaking"
    WRITING = "writing"
    CHAT = "chat"
    PRONUNCIATION = "pronunciation"


class LessonXP(BaseModel):
    """XP outcome of a single lesson quiz."""

    percentage: int = Field(ge=0, le=100)
    passed: bool
    perfect: bool
    bonus: int = Field(ge=0)
    xp_awarded: int = Field(ge=0)


class XPAward(BaseModel):
    """Result of applying an XP award to a progress snapshot."""

    amount: int
    progress: UserProgress
    level: LevelInfo
    previous_level: str
    leveled_up: bool = False


class LessonCompletion(BaseModel):
    """Result of completing a lesson quiz."""

    lesson: LessonXP
    award: XPAward
    first_pass: bool = False


class LessonRecord(BaseModel):
    """Stored outcome of a learner's latest attempt at one lesson."""

    completed: bool = True
    passed: bool = False
    quiz_score: int = Field(default=0, ge=0, le=100)
    quiz_score_raw: str = ""
    completed_at: datetime | None = None


class ProgressRecord(UserProgress):
    """A learner's persisted progress document."""

    user_id: str
    level: str = "A1"
    lessons: dict[str, LessonRecord] = Field(default_factory=dict)
    updated_at: datetime | None = None

    def snapshot(self) -> UserProgress:
        """The counters the progression engine reads."""
        return UserProgress.model_validate(
            self.model_dump(include=set(UserProgress.model_fields))
        )
