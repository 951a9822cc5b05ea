"""Pronunciation comparison models."""

from enum import StrEnum

from pydantic import BaseModel, Field


class FeedbackBand(StrEnum):
    """Qualitative bands a pronunciation score falls into."""

    NO_SPEECH = "no_speech"
    PERFECT = "perfect"
    EXCELLENT = "excellent"
    GOOD = "good"
    KEEP_PRACTICING = "keep_practicing"
    TRY_AGAIN = "try_again"

    @classmethod
    def from_score(cls, score: int) -> "FeedbackBand":
        """Map a 0-100 similarity score to its band."""
        if score >= 90:
            return cls.EXCELLENT
        elif score >= 75:
            return cls.GOOD
        elif score >= 50:
            return cls.KEEP_PRACTICING
        else:
            return cls.TRY_AGAIN

    @property
    def message(self) -> str:
        return FEEDBACK_MESSAGES[self]


FEEDBACK_MESSAGES: dict[FeedbackBand, str] = {
    FeedbackBand.NO_SPEECH: "No speech detected. Please try again.",
    FeedbackBand.PERFECT: "Perfect pronunciation!",
    FeedbackBand.EXCELLENT: "Excellent! Nearly perfect pronunciation.",
    FeedbackBand.GOOD: "Good effort! Minor pronunciation differences detected.",
    FeedbackBand.KEEP_PRACTICING: "Keep practicing! Focus on the stressed syllables.",
    FeedbackBand.TRY_AGAIN: "Try listening again carefully and repeat slowly.",
}


class PronunciationComparison(BaseModel):
    """Outcome of comparing a spoken transcript with a target phrase."""

    score: int = Field(ge=0, le=100)
    band: FeedbackBand
    feedback: str
    spoken_normalized: str
    target_normalized: str
