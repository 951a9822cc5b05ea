"""Tests for the pronunciation practice loop."""

from language_coach.errors import SpeechUnavailable
from language_coach.models.pronunciation import FeedbackBand
from language_coach.speech.capability import SpeechConfig
from language_coach.speech.practice import PronunciationPractice


class FakeInput:
    def __init__(self, transcript: str = "", error: Exception | None = None):
        self.transcript = transcript
        self.error = error
        self.configs: list[SpeechConfig] = []

    async def listen(self, config: SpeechConfig) -> str:
        self.configs.append(config)
        if self.error:
            raise self.error
        return self.transcript


class FakeOutput:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.spoken: list[str] = []

    async def speak(self, text: str, config: SpeechConfig) -> None:
        if self.error:
            raise self.error
        self.spoken.append(text)


class TestAttempt:
    async def test_scores_transcript(self):
        practice = PronunciationPractice(FakeInput("Thank you"))
        result = await practice.attempt("thank you")
        assert result.score == 100
        assert result.band == FeedbackBand.PERFECT

    async def test_silence(self):
        practice = PronunciationPractice(FakeInput(""))
        result = await practice.attempt("thank you")
        assert result.band == FeedbackBand.NO_SPEECH

    async def test_recognizer_failure_is_no_speech(self):
        practice = PronunciationPractice(FakeInput(error=SpeechUnavailable("not supported")))
        result = await practice.attempt("thank you")
        assert result.score == 0
        assert result.band == FeedbackBand.NO_SPEECH

    async def test_config_passed_through(self):
        speech_input = FakeInput("bonjour")
        practice = PronunciationPractice(speech_input, config=SpeechConfig(lang="fr-FR"))
        await practice.attempt("bonjour")
        assert speech_input.configs[0].lang == "fr-FR"


class TestPlayTarget:
    async def test_plays(self):
        output = FakeOutput()
        practice = PronunciationPractice(FakeInput(), output)
        assert await practice.play_target("good morning")
        assert output.spoken == ["good morning"]

    async def test_no_output(self):
        practice = PronunciationPractice(FakeInput())
        assert not await practice.play_target("good morning")

    async def test_output_failure(self):
        practice = PronunciationPractice(FakeInput(), FakeOutput(SpeechUnavailable("muted")))
        assert not await practice.play_target("good morning")


class TestSpeechConfig:
    def test_defaults(self):
        config = SpeechConfig()
        assert config.lang == "en-US"
        assert config.rate == 0.9
        assert not config.continuous
