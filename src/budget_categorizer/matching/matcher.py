"""Scores a single transaction against a single category's filter profile.

Three criterion families contribute, each only when configured and only
when at least one of its rules fires:

* keywords (weight 0.6), by substring or fuzzy token match
* merchant patterns (weight 0.8), by substring
* amount ranges (weight 0.4), on the absolute amount with inclusive bounds

The confidence is the mean over the families that fired. Every exclude
keyword found in the description then multiplies it by 0.3.
"""
from budget_categorizer.domain.keywords import extract_keywords
from budget_categorizer.domain.similarity import is_fuzzy_match
from budget_categorizer.logger import get_logger
from budget_categorizer.models import AmountRange, FilterProfile, MatchResult, Transaction

logger = get_logger(__name__)

KEYWORD_WEIGHT = 0.6
MERCHANT_WEIGHT = 0.8
AMOUNT_WEIGHT = 0.4
EXCLUSION_FACTOR = 0.3
MATCH_THRESHOLD = 0.3


def _format_bound(value: float | None) -> str:
    if value is None:
        return "any"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def amount_range_label(rng: AmountRange) -> str:
    return f"amount: {_format_bound(rng.min)} - {_format_bound(rng.max)}"


def in_amount_range(amount: float, rng: AmountRange) -> bool:
    value = abs(amount)
    if rng.min is not None and value < rng.min:
        return False
    if rng.max is not None and value > rng.max:
        return False
    return True


def score_keywords(
    description: str, keywords: tuple[str, ...], rules: list[str]
) -> float | None:
    """Return the keyword family's weighted score, or None if nothing matched."""
    if not keywords:
        return None
    text = description.lower()
    tokens = extract_keywords(description)
    matched = 0
    for keyword in keywords:
        needle = keyword.lower()
        if needle in text:
            matched += 1
            rules.append(f"keyword: {keyword}")
            continue
        for token in tokens:
            if is_fuzzy_match(needle, token):
                matched += 1
                rules.append(f"keyword: {keyword} (fuzzy: {token})")
                break
    if not matched:
        return None
    return matched / len(keywords) * KEYWORD_WEIGHT


def score_merchants(
    description: str, patterns: tuple[str, ...], rules: list[str]
) -> float | None:
    if not patterns:
        return None
    text = description.lower()
    matched = 0
    for pattern in patterns:
        if pattern.lower() in text:
            matched += 1
            rules.append(f"merchant: {pattern}")
    if not matched:
        return None
    return matched / len(patterns) * MERCHANT_WEIGHT


def score_amount(
    amount: float, ranges: tuple[AmountRange, ...], rules: list[str]
) -> float | None:
    if not ranges:
        return None
    matched = 0
    for rng in ranges:
        if in_amount_range(amount, rng):
            matched += 1
            rules.append(amount_range_label(rng))
    if not matched:
        return None
    return matched / len(ranges) * AMOUNT_WEIGHT


def match_transaction(transaction: Transaction, profile: FilterProfile) -> MatchResult:
    description = transaction.description or ""
    rules: list[str] = []

    scores = [
        score
        for score in (
            score_keywords(description, profile.keywords, rules),
            score_merchants(description, profile.merchant_patterns, rules),
            score_amount(transaction.amount, profile.amount_ranges, rules),
        )
        if score is not None
    ]
    confidence = sum(scores) / len(scores) if scores else 0.0

    text = description.lower()
    for keyword in profile.exclude_keywords:
        if keyword.lower() in text:
            confidence *= EXCLUSION_FACTOR
            rules.append(f"excluded: {keyword}")

    matches = confidence > MATCH_THRESHOLD
    logger.debug(
        "Scored '%s' at %.3f over %d criteria (match=%s)",
        description[:50],
        confidence,
        len(scores),
        matches,
    )
    return MatchResult(matches=matches, confidence=confidence, matched_rules=rules)
