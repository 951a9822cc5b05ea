"""Pronunciation practice loop over injected speech capabilities."""

import structlog

from language_coach.errors import SpeechUnavailable
from language_coach.models.pronunciation import PronunciationComparison
from language_coach.pronunciation.scorer import compare_pronunciation
from language_coach.speech.capability import SpeechConfig, SpeechInput, SpeechOutput

logger = structlog.get_logger()


class PronunciationPractice:
    """Plays a target phrase and scores the learner's attempt at it.

    Args:
        speech_input: Recognizer producing transcripts.
        speech_output: Synthesizer for playing the target, if available.
        config: Options passed to both capabilities.
    """

    def __init__(
        self,
        speech_input: SpeechInput,
        speech_output: SpeechOutput | None = None,
        config: SpeechConfig | None = None,
    ):
        self.speech_input = speech_input
        self.speech_output = speech_output
        self.config = config or SpeechConfig()

    async def play_target(self, text: str) -> bool:
        """Read the target aloud. Returns False if playback was not possible."""
        if self.speech_output is None:
            return False
        try:
            await self.speech_output.speak(text, self.config)
        except SpeechUnavailable as e:
            logger.warning("speech_output_unavailable", error=str(e))
            return False
        return True

    async def attempt(self, target: str) -> PronunciationComparison:
        """Listen for one attempt at ``target`` and score it.

        A recognizer failure is scored the same as silence.
        """
        try:
            transcript = await self.speech_input.listen(self.config)
        except SpeechUnavailable as e:
            logger.warning("speech_input_unavailable", error=str(e))
            transcript = ""
        result = compare_pronunciation(transcript, target)
        logger.info("pronunciation_attempt", score=result.score, band=result.band.value)
        return result
