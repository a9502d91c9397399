from rapidfuzz.distance import Levenshtein

FUZZY_MATCH_THRESHOLD = 0.7


def similarity(a: str, b: str) -> float:
    """
    Normalized edit-distance similarity: 1.0 for identical strings, 0.0 when
    every character of the longer string has to change.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    # Unit cost for insert, delete and substitute.
    distance = Levenshtein.distance(a, b)
    return (max_len - distance) / max_len


def is_fuzzy_match(a: str, b: str, threshold: float = FUZZY_MATCH_THRESHOLD) -> bool:
    return similarity(a, b) > threshold
