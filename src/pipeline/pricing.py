"""Price classification: provider categories, display symbols, budget tiers.

Budget tiers are a heuristic defined for one reference currency and applied
to every budget regardless of its stated currency. No conversion happens.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, NamedTuple

from src.core.schemas import Budget, PriceCategory

NO_PRICE_SYMBOL = "–"


class PriceInfo(NamedTuple):
    level: int
    symbol: str


PRICE_TABLE: Mapping[PriceCategory, PriceInfo] = MappingProxyType({
    PriceCategory.FREE: PriceInfo(0, "$"),
    PriceCategory.INEXPENSIVE: PriceInfo(1, "$"),
    PriceCategory.MODERATE: PriceInfo(2, "$$"),
    PriceCategory.EXPENSIVE: PriceInfo(3, "$$$"),
    PriceCategory.VERY_EXPENSIVE: PriceInfo(4, "$$$$"),
})

# (inclusive upper bound, accepted levels), checked in order.
BUDGET_TIERS: tuple[tuple[float, frozenset[int]], ...] = (
    (50.0, frozenset({0, 1})),
    (100.0, frozenset({1, 2})),
    (200.0, frozenset({2, 3})),
)
TOP_TIER_LEVELS = frozenset({3, 4})


def level_of(category: Any) -> int | None:
    """Ordinal level 0-4 for a price category, or None if unknown."""
    parsed = PriceCategory.parse(category)
    if parsed is None:
        return None
    return PRICE_TABLE[parsed].level


def symbol_of(category: Any) -> str:
    """Display symbol for a price category, or "–" if unknown."""
    parsed = PriceCategory.parse(category)
    if parsed is None:
        return NO_PRICE_SYMBOL
    return PRICE_TABLE[parsed].symbol


def budget_to_levels(budget: Budget | Mapping[str, Any] | None) -> frozenset[int] | None:
    """Price levels affordable within a budget.

    Returns None when there is no budget or its amount is not positive,
    meaning no budget constraint applies.
    """
    if budget is None:
        return None
    if isinstance(budget, Mapping):
        budget = Budget.model_validate(budget)
    if budget.amount <= 0:
        return None
    for upper, levels in BUDGET_TIERS:
        if budget.amount <= upper:
            return levels
    return TOP_TIER_LEVELS


def effective_price_levels(
    price_levels: Iterable[int] | None,
    budget_levels: Iterable[int] | None,
) -> frozenset[int] | None:
    """Intersection of the explicit price preference and the budget levels.

    None means neither constraint is present. An empty set means both are
    present but share no level.
    """
    preferred = frozenset(price_levels) if price_levels else None
    affordable = frozenset(budget_levels) if budget_levels is not None else None
    if preferred is None:
        return affordable
    if affordable is None:
        return preferred
    return preferred & affordable
