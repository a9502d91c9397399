import re

STOP_WORDS = frozenset({"the", "and", "for", "with", "from", "to", "of", "in", "at", "on"})
MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]")


def extract_keywords(description: str | None) -> list[str]:
    """Normalize a transaction description into content tokens, in order."""
    if not description:
        return []
    cleaned = _NON_WORD.sub(" ", description.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]
