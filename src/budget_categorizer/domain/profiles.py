"""Reading and writing filter profiles in their stored JSON shape.

The stored document uses the field names ``keywords``, ``merchantPatterns``,
``amountRanges`` (list of ``{min?, max?}``) and ``excludeKeywords``.
"""
import json
from typing import Any

from pydantic import ValidationError

from budget_categorizer.models import FilterProfile


class FilterProfileError(ValueError):
    """Stored filter profile text could not be turned into a FilterProfile."""


def parse_filter_profile(raw: str | bytes | dict[str, Any] | None) -> FilterProfile | None:
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            return None
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise FilterProfileError(f"Invalid filter profile JSON: {exc}") from exc
    else:
        data = raw

    if data is None:
        return None
    if not isinstance(data, dict):
        raise FilterProfileError(
            f"Filter profile must be a JSON object, got {type(data).__name__}"
        )
    try:
        return FilterProfile.model_validate(data)
    except ValidationError as exc:
        raise FilterProfileError(f"Invalid filter profile: {exc}") from exc


def resolve_filter_profile(value: FilterProfile | str | bytes | dict[str, Any] | None) -> FilterProfile | None:
    if isinstance(value, FilterProfile):
        return value
    return parse_filter_profile(value)


def dump_filter_profile(profile: FilterProfile) -> str:
    data = profile.model_dump(by_alias=True)
    data["amountRanges"] = [
        rng.model_dump(exclude_none=True) for rng in profile.amount_ranges
    ]
    return json.dumps(data)
