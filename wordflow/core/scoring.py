"""Word scoring."""

BASE_POINTS = 100
MIN_SCORED_LENGTH = 3


def score(word: str) -> int:
    """
    Points for a word: ``BASE_POINTS * 2 ** (length - 3)``.

    Lengths below 3 score as 3, so the exponent is never negative.
    3 letters -> 100, 4 -> 200, 5 -> 400, 6 -> 800.
    """
    length = max(MIN_SCORED_LENGTH, len(word))
    return BASE_POINTS * 2 ** (length - MIN_SCORED_LENGTH)
