"""Pronunciation scoring against a target phrase."""

import structlog

from language_coach.models.pronunciation import FeedbackBand, PronunciationComparison
from language_coach.pronunciation.edit_distance import similarity_percent
from language_coach.pronunciation.normalizer import normalize_text

logger = structlog.get_logger()


def _result(score: int, band: FeedbackBand, spoken: str, target: str) -> PronunciationComparison:
    return PronunciationComparison(
        score=score,
        band=band,
        feedback=band.message,
        spoken_normalized=spoken,
        target_normalized=target,
    )


def compare_pronunciation(spoken: str | None, target: str | None) -> PronunciationComparison:
    """Score a spoken transcript against the phrase the learner was asked to say.

    Both strings are normalized first. An empty transcript short-circuits to
    a zero "no speech" result and an exact match to a perfect 100; anything
    else is scored by edit-distance similarity and banded.

    Args:
        spoken: Transcript from the speech recognizer, possibly empty or None.
        target: Phrase or word from the lesson content.

    Returns:
        PronunciationComparison with score in [0, 100].
    """
    spoken_norm = normalize_text(spoken)
    target_norm = normalize_text(target)

    if not spoken_norm:
        return _result(0, FeedbackBand.NO_SPEECH, spoken_norm, target_norm)
    if spoken_norm == target_norm:
        return _result(100, FeedbackBand.PERFECT, spoken_norm, target_norm)

    score = similarity_percent(spoken_norm, target_norm)
    band = FeedbackBand.from_score(score)
    logger.debug("pronunciation_scored", score=score, band=band.value)
    return _result(score, band, spoken_norm, target_norm)
