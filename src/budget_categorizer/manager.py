from collections.abc import Iterable, Sequence

from budget_categorizer.core import settings
from budget_categorizer.logger import get_logger
from budget_categorizer.matching.learner import learn_filter_profile
from budget_categorizer.matching.ranker import rank_categories
from budget_categorizer.models import (
    BudgetCategory,
    CategorizationMatch,
    FilterProfile,
    Transaction,
)

logger = get_logger(__name__)


class CategorizerService:
    """
    Suggests categories for transactions against an in-memory snapshot of
    the user's budget categories, and learns new filter profiles from
    confirmed categorizations. Storing categories and profiles is left to
    the caller.
    """

    def __init__(
        self,
        categories: Iterable[BudgetCategory] = (),
        *,
        learning_min_samples: int | None = None,
        auto_apply_threshold: float | None = None,
    ) -> None:
        self._categories: list[BudgetCategory] = list(categories)
        self.learning_min_samples = (
            learning_min_samples
            if learning_min_samples is not None
            else settings.learning_min_samples()
        )
        self.auto_apply_threshold = (
            auto_apply_threshold
            if auto_apply_threshold is not None
            else settings.auto_apply_threshold()
        )

    @property
    def categories(self) -> list[BudgetCategory]:
        return list(self._categories)

    def set_categories(self, categories: Iterable[BudgetCategory]) -> None:
        self._categories = list(categories)
        logger.debug("Loaded %d categories", len(self._categories))

    def rank(self, transaction: Transaction) -> list[CategorizationMatch]:
        return rank_categories(transaction, self._categories)

    def suggest(self, transaction: Transaction) -> CategorizationMatch | None:
        ranked = self.rank(transaction)
        if not ranked:
            logger.debug("No suggestion for: '%s'", transaction.description[:50])
            return None
        best = ranked[0]
        logger.debug(
            "Suggesting '%s' (confidence: %.2f) for: '%s'",
            best.category_name,
            best.confidence,
            transaction.description[:50],
        )
        return best

    def categorize_many(
        self, transactions: Iterable[Transaction]
    ) -> list[CategorizationMatch | None]:
        return [self.suggest(transaction) for transaction in transactions]

    def should_auto_apply(self, match: CategorizationMatch) -> bool:
        if self.auto_apply_threshold <= 0:
            return False
        return match.confidence >= self.auto_apply_threshold

    def learn(
        self, category_id: int | str, transactions: Sequence[Transaction]
    ) -> FilterProfile | None:
        """
        Learn a filter profile for a category from its confirmed transactions.

        The new profile replaces any existing one. Returns None without
        touching the category when the sample is below the configured minimum.
        """
        index = self._index_of(category_id)
        category = self._categories[index]

        if len(transactions) < self.learning_min_samples:
            logger.info(
                "[LEARN] '%s': %d confirmed transactions, need %d. Keeping current filters.",
                category.name,
                len(transactions),
                self.learning_min_samples,
            )
            return None

        profile = learn_filter_profile(transactions)
        self._categories[index] = category.model_copy(update={"filters": profile})
        logger.info(
            "[LEARN] '%s': %d keywords, %d merchant patterns from %d transactions.",
            category.name,
            len(profile.keywords),
            len(profile.merchant_patterns),
            len(transactions),
        )
        return profile

    def _index_of(self, category_id: int | str) -> int:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        raise KeyError(category_id)
