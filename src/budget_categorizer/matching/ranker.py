from collections.abc import Iterable

from budget_categorizer.domain.profiles import FilterProfileError, resolve_filter_profile
from budget_categorizer.logger import get_logger
from budget_categorizer.matching.matcher import match_transaction
from budget_categorizer.models import BudgetCategory, CategorizationMatch, Transaction

logger = get_logger(__name__)


def rank_categories(
    transaction: Transaction, categories: Iterable[BudgetCategory]
) -> list[CategorizationMatch]:
    """
    Score the transaction against every category that carries a filter
    profile and return the matching ones, most confident first.

    Categories with equal confidence keep the order they were given in.
    A category whose stored profile cannot be parsed is logged and skipped.
    """
    matches: list[CategorizationMatch] = []

    for category in categories:
        if not category.filters:
            continue
        try:
            profile = resolve_filter_profile(category.filters)
        except FilterProfileError as exc:
            logger.warning(
                "Skipping category '%s' (id=%s): %s", category.name, category.id, exc
            )
            continue
        if profile is None or profile.is_empty():
            continue

        result = match_transaction(transaction, profile)
        if result.matches:
            matches.append(CategorizationMatch(
                category_id=category.id,
                category_name=category.name,
                confidence=result.confidence,
                matched_filters=result.matched_rules,
            ))

    # sort is stable, ties keep input order
    matches.sort(key=lambda match: match.confidence, reverse=True)
    return matches


def best_category(
    transaction: Transaction, categories: Iterable[BudgetCategory]
) -> CategorizationMatch | None:
    ranked = rank_categories(transaction, categories)
    return ranked[0] if ranked else None
