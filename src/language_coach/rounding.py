"""Integer percentage helpers."""


def percent_half_up(numerator: int, denominator: int) -> int:
    """Return ``round(100 * numerator / denominator)`` with halves rounded up.

    Computed in integer arithmetic so 62.5 always becomes 63, unlike the
    built-in ``round`` which rounds halves to even.
    """
    if denominator <= 0:
        raise ZeroDivisionError("denominator must be positive")
    return (200 * numerator + denominator) // (2 * denominator)


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))
