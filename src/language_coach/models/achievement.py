"""Achievement catalog models."""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from language_coach.models.progress import UserProgress

Predicate = Callable[[UserProgress], bool]


class Achievement(BaseModel):
    """A catalog entry. Whether it is earned is always derived, never stored."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    emoji: str = ""
    predicate: Predicate = Field(exclude=True, repr=False)

    def is_earned(self, progress: UserProgress) -> bool:
        return bool(self.predicate(progress))


class AchievementStatus(BaseModel):
    """Public view of an achievement with its earned flag."""

    id: str
    name: str
    description: str
    emoji: str = ""
    earned: bool
