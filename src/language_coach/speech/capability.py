"""Speech capability interfaces supplied by the host application."""

from typing import Protocol

from pydantic import BaseModel, Field


class SpeechConfig(BaseModel):
    """Options for recognition and synthesis."""

    lang: str = "en-US"
    rate: float = Field(default=0.9, gt=0)
    pitch: float = Field(default=1.0, ge=0)
    volume: float = Field(default=1.0, ge=0, le=1)
    interim: bool = False
    continuous: bool = False


class SpeechInput(Protocol):
    """Turns the learner's speech into a transcript.

    Implementations return an empty string when nothing was heard and raise
    ``SpeechUnavailable`` when recognition cannot run at all.
    """

    async def listen(self, config: SpeechConfig) -> str: ...


class SpeechOutput(Protocol):
    """Reads text aloud."""

    async def speak(self, text: str, config: SpeechConfig) -> None: ...
