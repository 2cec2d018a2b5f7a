"""Ranking: validate input, score every candidate, keep the top K.

Data flow:
  1. Validate candidates, profile, origin and top_k (fail fast, nothing scored)
  2. Score and explain each candidate into a new ScoredCandidate
  3. Stable sort by score descending (ties keep input order)
  4. Truncate to top_k
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.core.config import ScoringConfig
from src.core.errors import ValidationError
from src.core.schemas import LatLng, Place, RankResult, ScoredCandidate
from src.pipeline.pricing import budget_to_levels, effective_price_levels
from src.pipeline.scorer import explain_place
from src.profile.schema import Profile

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10


def rank(
    candidates: Sequence[Place | Mapping[str, Any]],
    profile: Profile | Mapping[str, Any] | None = None,
    origin: LatLng | Mapping[str, Any] | None = None,
    top_k: int | float = DEFAULT_TOP_K,
    config: ScoringConfig | None = None,
) -> RankResult:
    """Rank candidates for a profile and return the best top_k.

    Raises:
        ValidationError: If candidates is not a list, a candidate or the
            profile is malformed, origin lacks numeric lat/lng, or top_k is
            not a positive number.
    """
    places = _validate_candidates(candidates)
    norm_profile = _validate_profile(profile)
    norm_origin = _validate_origin(origin)
    limit = _validate_top_k(top_k)

    logger.info(
        "Ranking %d candidates (top_k=%d, keywords=%s, price_levels=%s, min_rating=%s, "
        "require_open=%s, max_distance_km=%s, origin=%s)",
        len(places),
        limit,
        norm_profile.keywords,
        norm_profile.price_levels,
        norm_profile.min_rating,
        norm_profile.require_open,
        norm_profile.max_distance_km,
        norm_origin is not None,
    )
    _warn_disjoint_price_constraints(norm_profile)

    scored: list[ScoredCandidate] = []
    for place in places:
        score, why = explain_place(place, norm_profile, norm_origin, config)
        scored.append(ScoredCandidate.from_place(place, score, why))

    # sorted() is stable, also with reverse=True
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)[:limit]

    logger.info("Ranking returned %d of %d candidates", len(ranked), len(places))
    return RankResult(total=len(places), returned=len(ranked), items=ranked)


def export_rank_json(result: RankResult, precision: int = 4) -> str:
    """Export a ranking result as a JSON string."""
    return json.dumps(result.to_dict(precision), indent=2, ensure_ascii=False)


def _validate_candidates(candidates: Any) -> list[Place]:
    if not isinstance(candidates, list | tuple):
        msg = "candidates must be a list of normalized places"
        raise ValidationError(msg)
    places: list[Place] = []
    for index, candidate in enumerate(candidates):
        if isinstance(candidate, Place):
            places.append(candidate)
            continue
        try:
            places.append(Place.model_validate(candidate))
        except PydanticValidationError as e:
            msg = f"candidates[{index}] is not a valid place: {_summarize(e)}"
            raise ValidationError(msg, extra={"index": index}) from e
    return places


def _validate_profile(profile: Any) -> Profile:
    if profile is None:
        return Profile()
    if isinstance(profile, Profile):
        return profile
    try:
        return Profile.model_validate(profile)
    except PydanticValidationError as e:
        msg = f"profile is invalid: {_summarize(e)}"
        raise ValidationError(msg) from e


def _validate_origin(origin: Any) -> LatLng | None:
    if origin is None:
        return None
    if isinstance(origin, LatLng):
        return origin
    lat = origin.get("lat") if isinstance(origin, Mapping) else None
    lng = origin.get("lng") if isinstance(origin, Mapping) else None
    if not (_is_number(lat) and _is_number(lng)):
        msg = "origin must be {lat: number, lng: number}"
        raise ValidationError(msg)
    return LatLng(lat=lat, lng=lng)


def _validate_top_k(top_k: Any) -> int:
    if not _is_number(top_k) or top_k <= 0:
        msg = "top_k must be a positive number"
        raise ValidationError(msg)
    return int(top_k)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _warn_disjoint_price_constraints(profile: Profile) -> None:
    budget_levels = budget_to_levels(profile.max_budget)
    allowed = effective_price_levels(profile.price_levels, budget_levels)
    if allowed is not None and not allowed:
        logger.warning(
            "Price levels %s and budget levels %s do not overlap; price is not constraining",
            sorted(profile.price_levels),
            sorted(budget_levels or ()),
        )


def _summarize(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "value"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
