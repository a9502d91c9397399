import json
import math
from datetime import datetime
from typing import Any

from budget_categorizer.models import BudgetCategory, Transaction

_FILTER_KEYS = ("autoCategorizeFilters", "filterProfile", "filters")
_DATE_KEYS = ("created", "date", "createdAt")


def parse_amount(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return 0.0
    # "NaN" and "inf" parse, but would slip through every range comparison.
    return amount if math.isfinite(amount) else 0.0


def parse_date(value: str | datetime | None) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def build_transaction(record: dict[str, Any]) -> Transaction:
    date_raw = next((record[key] for key in _DATE_KEYS if record.get(key)), None)
    return Transaction(
        description=str(record.get("description") or ""),
        amount=parse_amount(record.get("amount")),
        date=parse_date(date_raw),
        id=record.get("id"),
    )


def build_budget_category(record: dict[str, Any]) -> BudgetCategory:
    # The filters column is kept raw; parsing happens per category while ranking.
    filters = next((record[key] for key in _FILTER_KEYS if record.get(key)), None)
    if isinstance(filters, (dict, list)):
        filters = json.dumps(filters)
    return BudgetCategory(
        id=record["id"],
        name=str(record.get("name") or ""),
        filters=filters,
    )
