"""Transcript normalization for pronunciation comparison."""

import re

_NON_LETTER = re.compile(r"[^a-z\s]")


def normalize_text(text: str | None) -> str:
    """Lowercase, drop everything but a-z and whitespace, then trim.

    Internal runs of whitespace are kept as they are. ``None`` (no transcript
    from the microphone) normalizes to an empty string.
    """
    if not text:
        return ""
    return _NON_LETTER.sub("", text.lower()).strip()
