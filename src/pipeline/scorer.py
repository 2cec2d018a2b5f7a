"""Weighted scoring and explanation for a single place.

score = rating_penalty * sum(weight_i * signal_i), clamped to [0, 1].
The penalty applies only when the place has a rating below the profile's
min_rating; unrated places are never penalized. The explanation is built
from the same breakdown the score came from.
"""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from src.core.config import ScoringConfig
from src.core.geo import distance_km
from src.core.schemas import LatLng, Place
from src.pipeline.pricing import NO_PRICE_SYMBOL, budget_to_levels, symbol_of
from src.pipeline.signals import (
    distance_score,
    keyword_score,
    open_score,
    price_score,
    quality_score,
)
from src.profile.schema import Profile

logger = logging.getLogger(__name__)

WHY_SEPARATOR = " · "
KEYWORD_MATCH_MIN_PCT = 50


class SignalBreakdown(BaseModel):
    """Intermediate values of one scoring pass."""

    model_config = ConfigDict(frozen=True)

    distance_km: float | None
    keyword: float
    price: float
    quality: float
    distance: float
    open: float
    rating_penalty: float
    score: float


def score_place(
    place: Place,
    profile: Profile,
    origin: LatLng | None,
    config: ScoringConfig | None = None,
) -> SignalBreakdown:
    """Compute every signal and the weighted score for one place."""
    config = config or ScoringConfig()

    km = distance_km(origin, place.location) if origin is not None else None
    budget_levels = budget_to_levels(profile.max_budget)

    keyword = keyword_score(place, profile.keywords)
    price = price_score(place, profile.price_levels, budget_levels)
    quality = quality_score(place.rating, place.user_rating_count)
    opened = open_score(place.open_now, profile.require_open)
    distance = distance_score(km, profile.max_distance_km)

    penalty = 1.0
    if place.rating is not None and place.rating < profile.min_rating:
        penalty = config.rating_penalty

    weighted = (
        config.keyword_weight * keyword
        + config.price_weight * price
        + config.quality_weight * quality
        + config.distance_weight * distance
        + config.open_weight * opened
    )
    score = max(0.0, min(1.0, weighted * penalty))

    return SignalBreakdown(
        distance_km=km,
        keyword=keyword,
        price=price,
        quality=quality,
        distance=distance,
        open=opened,
        rating_penalty=penalty,
        score=score,
    )


def build_why(place: Place, breakdown: SignalBreakdown, keywords: Sequence[str]) -> str:
    """Short human-readable justification, e.g. "$$ · 4.5★ (120 reviews) · 850 m away"."""
    bits: list[str] = []

    symbol = symbol_of(place.price_level)
    if symbol != NO_PRICE_SYMBOL:
        bits.append(symbol)

    if place.rating is not None:
        reviews = f" ({place.user_rating_count} reviews)" if place.user_rating_count else ""
        bits.append(f"{place.rating:.1f}★{reviews}")

    km = breakdown.distance_km
    if km is not None:
        dist = f"{round(km * 1000)} m" if km < 1 else f"{km:.1f} km"
        bits.append(f"{dist} away")

    if keywords:
        pct = round(breakdown.keyword * 100)
        if pct >= KEYWORD_MATCH_MIN_PCT:
            bits.append(f"matches {pct}% of tastes ({', '.join(keywords)})")

    if place.open_now is True:
        bits.append("open now")

    return WHY_SEPARATOR.join(b for b in bits if b)


def explain_place(
    place: Place,
    profile: Profile,
    origin: LatLng | None,
    config: ScoringConfig | None = None,
) -> tuple[float, str]:
    """Score a place and explain the result in one pass."""
    breakdown = score_place(place, profile, origin, config)
    logger.debug(
        "Scored %s: kw=%.2f price=%.2f quality=%.2f dist=%.2f open=%.2f penalty=%.2f -> %.4f",
        place.place_id,
        breakdown.keyword,
        breakdown.price,
        breakdown.quality,
        breakdown.distance,
        breakdown.open,
        breakdown.rating_penalty,
        breakdown.score,
    )
    return breakdown.score, build_why(place, breakdown, profile.keywords)
