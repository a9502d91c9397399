from collections import Counter
from collections.abc import Iterable, Sequence

from budget_categorizer.domain.keywords import extract_keywords
from budget_categorizer.logger import get_logger
from budget_categorizer.models import AmountRange, FilterProfile, Transaction

logger = get_logger(__name__)

MAX_KEYWORDS = 5
MAX_MERCHANT_PATTERNS = 3
MIN_MERCHANT_LENGTH = 4
AMOUNT_LOWER_PADDING = 0.5
AMOUNT_UPPER_PADDING = 1.5


def _recurring(items: Iterable[str], limit: int) -> list[str]:
    # most_common is stable: equal counts keep first-seen order.
    counts = Counter(items)
    return [item for item, count in counts.most_common() if count > 1][:limit]


def _merchant_candidate(description: str) -> str | None:
    words = description.split()
    return words[0] if words else None


def learn_filter_profile(transactions: Sequence[Transaction]) -> FilterProfile:
    """Build a filter profile from transactions confirmed for one category.

    Recurring description tokens become keywords, recurring leading words
    become merchant patterns, and the observed absolute amounts (padded by
    half on the low side and half again on the high side) become a single
    amount range. Exclusions are left for the user to add.
    """
    if not transactions:
        return FilterProfile()

    keywords = _recurring(
        (token for tx in transactions for token in extract_keywords(tx.description)),
        MAX_KEYWORDS,
    )

    candidates = (_merchant_candidate(tx.description) for tx in transactions)
    merchant_patterns = _recurring(
        (word for word in candidates if word and len(word) >= MIN_MERCHANT_LENGTH),
        MAX_MERCHANT_PATTERNS,
    )

    amounts = [abs(tx.amount) for tx in transactions]
    amount_range = AmountRange(
        min=min(amounts) * AMOUNT_LOWER_PADDING,
        max=max(amounts) * AMOUNT_UPPER_PADDING,
    )

    logger.debug(
        "Learned %d keywords, %d merchant patterns from %d transactions",
        len(keywords),
        len(merchant_patterns),
        len(transactions),
    )
    return FilterProfile(
        keywords=keywords,
        merchant_patterns=merchant_patterns,
        amount_ranges=[amount_range],
    )
