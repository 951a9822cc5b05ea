"""REST API routes for learner progress and pronunciation scoring."""

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from language_coach.config import Settings, get_settings
from language_coach.errors import InvalidInput
from language_coach.models.progress import ActivityType, XPAward
from language_coach.models.pronunciation import PronunciationComparison
from language_coach.progression.achievements import achievement_statuses
from language_coach.progression.levels import get_level_thresholds, level_from_xp
from language_coach.progression.streak import StreakState
from language_coach.pronunciation.scorer import compare_pronunciation
from language_coach.storage.progress import validate_user_id
from language_coach.storage.tracker import ProgressTracker
from language_coach.storage.xp_history import read_xp_history

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class XPRequest(BaseModel):
    amount: int = Field(ge=0)
    source: str = "manual"


class ActivityRequest(BaseModel):
    activity: ActivityType


class LessonRequest(BaseModel):
    correct: int
    total: int


MAX_PHRASE_LENGTH = 500


class PronunciationRequest(BaseModel):
    spoken: str | None = Field(default=None, max_length=MAX_PHRASE_LENGTH)
    target: str = Field(max_length=MAX_PHRASE_LENGTH)


def _checked_user_id(user_id: str) -> str:
    try:
        return validate_user_id(user_id)
    except InvalidInput:
        raise HTTPException(status_code=400, detail="Invalid user ID format")


def _tracker(settings: Settings) -> ProgressTracker:
    return ProgressTracker(
        progress_dir=settings.progress_dir,
        history_dir=settings.xp_history_dir,
        policy=settings.xp_policy(),
        thresholds=get_level_thresholds(settings.levels_path),
    )


def _award_response(award: XPAward) -> dict:
    return {
        "xp_awarded": award.amount,
        "xp": award.progress.xp,
        "streak": award.progress.streak,
        "level": award.level.model_dump(),
        "leveled_up": award.leveled_up,
    }


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/levels")
async def list_levels() -> list[dict]:
    """Return the level table in ascending order."""
    settings = get_settings()
    return [t.model_dump() for t in get_level_thresholds(settings.levels_path)]


@router.get("/users/{user_id}/progress")
def get_progress(user_id: str) -> dict:
    """Return a learner's counters with derived level and achievements."""
    user_id = _checked_user_id(user_id)
    tracker = _tracker(get_settings())
    record = tracker.load(user_id)
    snapshot = record.snapshot()
    return {
        "user_id": user_id,
        "xp": record.xp,
        "streak": record.streak,
        "streak_state": StreakState.of(record.streak),
        "streak_last_date": record.streak_last_date,
        "lessons_completed": record.lessons_completed,
        "chat_sessions": record.chat_sessions,
        "level": level_from_xp(record.xp, tracker.thresholds).model_dump(),
        "achievements": [
            s.model_dump() for s in achievement_statuses(snapshot, tracker.catalog)
        ],
    }


@router.post("/users/{user_id}/xp")
def post_xp(user_id: str, body: XPRequest) -> dict:
    """Award XP directly."""
    user_id = _checked_user_id(user_id)
    try:
        award = _tracker(get_settings()).award(user_id, body.amount, body.source)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _award_response(award)


@router.post("/users/{user_id}/activities")
def post_activity(user_id: str, body: ActivityRequest) -> dict:
    """Award XP for a practice activity."""
    user_id = _checked_user_id(user_id)
    award = _tracker(get_settings()).record_activity(user_id, body.activity)
    return _award_response(award)


@router.post("/users/{user_id}/lessons/{lesson_id}/complete")
def post_lesson_complete(user_id: str, lesson_id: str, body: LessonRequest) -> dict:
    """Record a finished lesson quiz."""
    user_id = _checked_user_id(user_id)
    try:
        completion = _tracker(get_settings()).complete_lesson(
            user_id, lesson_id, body.correct, body.total
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        **_award_response(completion.award),
        "quiz_percentage": completion.lesson.percentage,
        "passed": completion.lesson.passed,
        "lessons_completed": completion.award.progress.lessons_completed,
    }


@router.get("/users/{user_id}/achievements")
def get_achievements(user_id: str) -> list[dict]:
    """List every achievement with the learner's earned flag."""
    user_id = _checked_user_id(user_id)
    tracker = _tracker(get_settings())
    snapshot = tracker.load(user_id).snapshot()
    return [s.model_dump() for s in achievement_statuses(snapshot, tracker.catalog)]


@router.get("/users/{user_id}/xp-history")
def get_xp_history(user_id: str) -> dict:
    """Return the learner's XP events, oldest first."""
    user_id = _checked_user_id(user_id)
    return read_xp_history(get_settings().xp_history_dir, user_id)


@router.post("/pronunciation/compare")
def post_pronunciation(body: PronunciationRequest) -> PronunciationComparison:
    """Score a transcript against its target phrase."""
    return compare_pronunciation(body.spoken, body.target)
