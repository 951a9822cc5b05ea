"""Levenshtein distance and the similarity ratio built on it."""

from language_coach.rounding import percent_half_up


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance with unit-cost insert, delete and substitute.

    Keeps only two rows of the dynamic-programming matrix.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return ``1 - levenshtein(a, b) / max(len(a), len(b))``.

    Two empty strings are identical (1.0); exactly one empty string scores 0.0.
    """
    if not a:
        return 1.0 if not b else 0.0
    if not b:
        return 0.0
    return 1 - levenshtein(a, b) / max(len(a), len(b))


def similarity_percent(a: str, b: str) -> int:
    """Similarity as a 0-100 integer, rounded half up in exact arithmetic."""
    if not a:
        return 100 if not b else 0
    if not b:
        return 0
    longest = max(len(a), len(b))
    return percent_half_up(longest - levenshtein(a, b), longest)
