"""Core data models for the ranking engine.

All models are frozen. Field names are snake_case in Python and camelCase
on the wire (``placeId``, ``userRatingCount``); both are accepted on input.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class PriceCategory(str, Enum):
    """Provider price categories, cheapest first."""

    FREE = "FREE"
    INEXPENSIVE = "INEXPENSIVE"
    MODERATE = "MODERATE"
    EXPENSIVE = "EXPENSIVE"
    VERY_EXPENSIVE = "VERY_EXPENSIVE"

    @classmethod
    def parse(cls, value: Any) -> "PriceCategory | None":
        """Resolve a category from its name or the Places API spelling.

        ``"PRICE_LEVEL_MODERATE"``, ``"moderate"`` and ``PriceCategory.MODERATE``
        all resolve to MODERATE. Anything unrecognised returns None.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        name = value.strip().upper().removeprefix("PRICE_LEVEL_")
        try:
            return cls(name)
        except ValueError:
            return None


class LatLng(BaseModel):
    """A geographic coordinate in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Budget(BaseModel):
    """Spending limit. Currency is informational only; nothing is converted."""

    model_config = _WIRE_CONFIG

    amount: float
    currency: str | None = None


class Place(BaseModel):
    """A normalized restaurant candidate.

    Only place_id is required. Every other field may be missing and the
    scorers fall back to neutral defaults for it.
    """

    model_config = _WIRE_CONFIG

    place_id: str
    name: str | None = None
    rating: float | None = None
    user_rating_count: int = Field(default=0, ge=0)
    price_level: PriceCategory | None = None
    location: LatLng | None = None
    open_now: bool | None = None
    types: list[str] = Field(default_factory=list)
    primary_type: str | None = None
    summary: str | None = None
    website: str | None = None
    phone: str | None = None

    @field_validator("price_level", mode="before")
    @classmethod
    def unknown_price_is_none(cls, v: Any) -> PriceCategory | None:
        return PriceCategory.parse(v)

    @field_validator("user_rating_count", mode="before")
    @classmethod
    def missing_count_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("types", mode="before")
    @classmethod
    def missing_types_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ScoredCandidate(Place):
    """A Place plus the score and explanation computed for it."""

    score: float = Field(ge=0.0, le=1.0)
    why: str = ""

    @classmethod
    def from_place(cls, place: Place, score: float, why: str) -> "ScoredCandidate":
        """Build a new record from the place's fields; the place is untouched."""
        data = place.model_dump()
        data.update(score=score, why=why)
        return cls(**data)

    def to_item(self, precision: int = 4) -> dict[str, Any]:
        """Wire representation with the score rounded for display."""
        return {
            "placeId": self.place_id,
            "name": self.name,
            "rating": self.rating,
            "userRatingCount": self.user_rating_count,
            "priceLevel": self.price_level.value if self.price_level else None,
            "location": self.location.model_dump() if self.location else None,
            "openNow": self.open_now,
            "score": round(self.score, precision),
            "why": self.why,
            "website": self.website,
            "phone": self.phone,
            "types": list(self.types),
            "primaryType": self.primary_type,
        }


class RankResult(BaseModel):
    """Outcome of a ranking call."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    returned: int = Field(ge=0)
    items: list[ScoredCandidate] = Field(default_factory=list)

    def to_dict(self, precision: int = 4) -> dict[str, Any]:
        return {
            "total": self.total,
            "returned": self.returned,
            "items": [item.to_item(precision) for item in self.items],
        }
