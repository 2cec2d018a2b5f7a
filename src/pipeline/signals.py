"""Per-criterion signal scorers.

Each scorer is total: it returns a value in [0, 1] for every input,
including places with no rating, location, price or opening data.
Missing data resolves to a neutral default instead of excluding the place.
"""

import math
from collections.abc import Iterable, Sequence

from src.core.schemas import Place
from src.pipeline.pricing import effective_price_levels, level_of

UNKNOWN_PRICE_SCORE = 0.5
UNKNOWN_OPEN_SCORE = 0.6
UNKNOWN_DISTANCE_SCORE = 0.6

NEAR_KM = 0.25
FAR_DISTANCE_SCORE = 0.1
REVIEWS_FOR_FULL_CONFIDENCE_LOG10 = 3.0


def keyword_score(place: Place, keywords: Sequence[str]) -> float:
    """Fraction of keywords found as substrings in the place's text.

    The bag is name, types, summary and primary type, lowercased. Blank
    keywords never hit but still count towards the total.
    """
    if not keywords:
        return 0.0
    bag = " ".join([
        place.name or "",
        *place.types,
        place.summary or "",
        place.primary_type or "",
    ]).lower()

    hits = 0
    for kw in keywords:
        k = str(kw or "").lower().strip()
        if k and k in bag:
            hits += 1
    return hits / len(keywords)


def price_score(
    place: Place,
    price_levels: Iterable[int] | None,
    budget_levels: Iterable[int] | None,
) -> float:
    """1 inside the effective price set, 0 outside, 0.5 when the price is unknown.

    Without any constraint, or when the constraints share no level, every
    place scores 1.
    """
    allowed = effective_price_levels(price_levels, budget_levels)
    if not allowed:
        return 1.0
    level = level_of(place.price_level)
    if level is None:
        return UNKNOWN_PRICE_SCORE
    return 1.0 if level in allowed else 0.0


def quality_score(rating: float | None, review_count: int | None) -> float:
    """Rating scaled by review-volume confidence.

    Confidence grows with log10 of the review count and saturates around
    1000 reviews, so a 5-star place with one review does not outrank a
    4.5-star place with thousands.
    """
    if not rating:
        return 0.0
    r = min(max(rating, 0.0), 5.0)
    confidence = math.log10((review_count or 0) + 1) / REVIEWS_FOR_FULL_CONFIDENCE_LOG10
    return (r / 5.0) * min(confidence, 1.0)


def open_score(open_now: bool | None, require_open: bool) -> float:
    if not require_open:
        return 1.0
    if open_now is True:
        return 1.0
    if open_now is False:
        return 0.0
    return UNKNOWN_OPEN_SCORE


def distance_score(km: float | None, max_km: float = 3.0) -> float:
    """Flat near plateau, linear decay, and a floor so far places stay rankable."""
    if km is None:
        return UNKNOWN_DISTANCE_SCORE
    if km <= NEAR_KM:
        return 1.0
    if km >= max_km:
        return FAR_DISTANCE_SCORE
    return 1.0 - 0.9 * (km / max_km)
