"""Tests for weighted scoring and explanations."""

import pytest

from src.core.config import ScoringConfig
from src.core.schemas import LatLng, Place
from src.pipeline.scorer import build_why, explain_place, score_place
from src.profile.schema import Profile

ORIGIN = LatLng(lat=14.5572969, lng=-90.7332233)


def _place(**overrides: object) -> Place:
    defaults: dict[str, object] = {
        "place_id": "p1",
        "name": "Taquería El Sol",
        "rating": 4.5,
        "user_rating_count": 120,
        "price_level": "MODERATE",
        "location": {"lat": 14.5572969, "lng": -90.7332233},
        "open_now": True,
        "types": ["restaurant", "mexican_restaurant"],
    }
    defaults.update(overrides)
    return Place(**defaults)  # type: ignore[arg-type]


def _empty_place() -> Place:
    return Place(place_id="empty")


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class TestScorePlace:
    def test_missing_data_neutrality(self) -> None:
        profile = Profile(require_open=True)
        breakdown = score_place(_empty_place(), profile, ORIGIN)
        expected = 0.30 * 0 + 0.15 * 1 + 0.30 * 0 + 0.15 * 0.6 + 0.10 * 0.6
        assert breakdown.score == pytest.approx(expected)
        assert breakdown.score == pytest.approx(0.30)

    def test_neutral_signals(self) -> None:
        breakdown = score_place(_empty_place(), Profile(require_open=True), None)
        assert breakdown.distance_km is None
        assert breakdown.keyword == 0.0
        assert breakdown.price == 1.0
        assert breakdown.quality == 0.0
        assert breakdown.distance == 0.6
        assert breakdown.open == 0.6
        assert breakdown.rating_penalty == 1.0

    def test_rating_below_min_penalized(self) -> None:
        place = _place(rating=3.5)
        lenient = score_place(place, Profile(), ORIGIN)
        strict = score_place(place, Profile(min_rating=4.0), ORIGIN)
        assert strict.rating_penalty == 0.6
        assert strict.score == pytest.approx(lenient.score * 0.6)

    def test_unknown_rating_never_penalized(self) -> None:
        place = _place(rating=None)
        breakdown = score_place(place, Profile(min_rating=5.0), ORIGIN)
        assert breakdown.rating_penalty == 1.0

    def test_rating_at_min_not_penalized(self) -> None:
        breakdown = score_place(_place(rating=4.0), Profile(min_rating=4.0), ORIGIN)
        assert breakdown.rating_penalty == 1.0

    def test_perfect_place_scores_one(self) -> None:
        place = _place(rating=5.0, user_rating_count=5000, name="Vegan Tacos")
        profile = Profile(keywords=["tacos", "vegan"], price_levels=[2], require_open=True)
        breakdown = score_place(place, profile, ORIGIN)
        assert breakdown.score == pytest.approx(1.0)
        assert breakdown.score <= 1.0

    def test_score_bounds(self) -> None:
        places = [
            _empty_place(),
            _place(),
            _place(rating=1.0, open_now=False, price_level="VERY_EXPENSIVE"),
            _place(location={"lat": 40.0, "lng": -3.7}),
        ]
        profiles = [
            Profile(),
            Profile(keywords=["sushi"], price_levels=[0], min_rating=4.9, require_open=True),
            Profile(max_budget={"amount": 30}),
        ]
        for place in places:
            for profile in profiles:
                for origin in (ORIGIN, None):
                    breakdown = score_place(place, profile, origin)
                    assert 0.0 <= breakdown.score <= 1.0

    def test_budget_feeds_price_signal(self) -> None:
        profile = Profile(max_budget={"amount": 250, "currency": "GTQ"})
        assert score_place(_place(price_level="INEXPENSIVE"), profile, None).price == 0.0
        assert score_place(_place(price_level="EXPENSIVE"), profile, None).price == 1.0

    def test_custom_weights(self) -> None:
        config = ScoringConfig(
            keyword_weight=0.0,
            price_weight=0.0,
            quality_weight=1.0,
            distance_weight=0.0,
            open_weight=0.0,
        )
        place = _place(rating=4.0, user_rating_count=999)
        assert score_place(place, Profile(), None, config).score == pytest.approx(0.8)

    def test_deterministic(self) -> None:
        profile = Profile(keywords=["tacos"], min_rating=4.0)
        first = score_place(_place(), profile, ORIGIN)
        second = score_place(_place(), profile, ORIGIN)
        assert first == second


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------


class TestBuildWhy:
    def test_full_explanation(self) -> None:
        place = _place(name="Tacos Veganos", location={"lat": 14.5600, "lng": -90.7332233})
        profile = Profile(keywords=["tacos", "vegan"])
        _, why = explain_place(place, profile, ORIGIN)
        parts = why.split(" · ")
        assert parts[0] == "$$"
        assert parts[1] == "4.5★ (120 reviews)"
        assert parts[2].endswith(" m away")
        assert parts[3] == "matches 100% of tastes (tacos, vegan)"
        assert parts[4] == "open now"

    def test_kilometres_when_far(self) -> None:
        place = _place(location={"lat": 14.6349, "lng": -90.5069})
        _, why = explain_place(place, Profile(), ORIGIN)
        assert "km away" in why
        assert " m away" not in why

    def test_meters_when_near(self) -> None:
        _, why = explain_place(_place(), Profile(), ORIGIN)
        assert "0 m away" in why

    def test_low_keyword_match_omitted(self) -> None:
        place = _place(name="Sushi Bar", types=[])
        _, why = explain_place(place, Profile(keywords=["tacos", "vegan", "sushi"]), ORIGIN)
        assert "matches" not in why

    def test_half_keyword_match_shown(self) -> None:
        place = _place(name="Tacos", types=[])
        _, why = explain_place(place, Profile(keywords=["tacos", "vegan"]), ORIGIN)
        assert "matches 50% of tastes (tacos, vegan)" in why

    def test_missing_pieces_omitted(self) -> None:
        _, why = explain_place(_empty_place(), Profile(), ORIGIN)
        assert why == ""

    def test_rating_without_reviews(self) -> None:
        _, why = explain_place(_place(user_rating_count=0), Profile(), None)
        assert "4.5★" in why
        assert "reviews" not in why

    def test_closed_place_has_no_open_flag(self) -> None:
        _, why = explain_place(_place(open_now=False), Profile(), None)
        assert "open now" not in why

    def test_uses_breakdown_values(self) -> None:
        place = _place(name="Tacos", types=[])
        breakdown = score_place(place, Profile(), None).model_copy(update={"keyword": 0.75})
        why = build_why(place, breakdown, ["tacos", "vegan"])
        assert "matches 75% of tastes" in why
