"""Normalized edit-distance similarity.

Used by fuzzy key matching and translation-memory lookup.
"""

from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

DEFAULT_MAX_LENGTH = 1000

T = TypeVar("T")


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance with unit costs (full DP matrix)."""
    rows = len(b) + 1
    cols = len(a) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,
                    matrix[i][j - 1] + 1,
                    matrix[i - 1][j] + 1,
                )

    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str, max_length: Optional[int] = DEFAULT_MAX_LENGTH) -> float:
    """Similarity in [0, 1]: ``(longer - distance) / longer``.

    Two empty strings are identical (1.0). When either string is longer
    than ``max_length`` the distance is not computed: equal strings score
    1.0 and anything else 0.0.
    """
    if a == b:
        return 1.0

    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    if max_length is not None and longer > max_length:
        return 0.0

    return (longer - levenshtein_distance(a, b)) / longer


def rank_by_similarity(
    query: str,
    candidates: Iterable[T],
    text_of: Callable[[T], str],
    threshold: float,
    max_length: Optional[int] = DEFAULT_MAX_LENGTH,
) -> List[Tuple[T, float]]:
    """Score candidates against ``query`` and keep those at or above threshold.

    Returns:
        (candidate, score) pairs sorted by descending score. Ties keep their
        input order.
    """
    scored = []
    for candidate in candidates:
        score = similarity(query, text_of(candidate), max_length=max_length)
        if score >= threshold:
            scored.append((candidate, score))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored
