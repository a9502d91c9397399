from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Transaction(BaseModel):
    description: str = ""
    amount: float = 0.0  # signed, negative for outgoing payments
    date: Optional[datetime] = None
    id: Optional[Union[int, str]] = None


class AmountRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None  # inclusive, None = unbounded
    max: Optional[float] = None  # inclusive, None = unbounded


class FilterProfile(BaseModel):
    """Per-category rule set used to auto-categorize transactions.

    Field aliases are the JSON names stored in the category's filters column.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Tuples keep the frozen profile immutable; lists are accepted on input.
    keywords: tuple[str, ...] = ()
    merchant_patterns: tuple[str, ...] = Field(default=(), alias="merchantPatterns")
    amount_ranges: tuple[AmountRange, ...] = Field(default=(), alias="amountRanges")
    exclude_keywords: tuple[str, ...] = Field(default=(), alias="excludeKeywords")

    def is_empty(self) -> bool:
        return not (self.keywords or self.merchant_patterns or self.amount_ranges)


class MatchResult(BaseModel):
    matches: bool
    confidence: float  # 0.0 to 1.0
    matched_rules: list[str] = Field(default_factory=list)


class BudgetCategory(BaseModel):
    id: Union[int, str]
    name: str
    # Raw JSON text as stored, or an already parsed profile.
    filters: Optional[Union[FilterProfile, str]] = None


class CategorizationMatch(BaseModel):
    category_id: Union[int, str]
    category_name: str
    confidence: float
    matched_filters: list[str] = Field(default_factory=list)
