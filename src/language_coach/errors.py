"""Exception types raised by the coaching core."""


class CoachError(Exception):
    """Base class for language_coach errors."""


class InvalidInput(CoachError, ValueError):
    """A caller violated a function contract (e.g. a quiz with zero questions)."""


class SpeechUnavailable(CoachError):
    """The speech capability could not produce a transcript or play audio."""
