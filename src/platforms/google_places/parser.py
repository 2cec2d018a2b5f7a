"""Google Places (API v1) parser: converts raw place payloads into Place objects.

Missing or mistyped optional fields become None (or 0 / [] for counts and
types). Only the place id is required; payloads without one are skipped.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from src.core.schemas import LatLng, Place

logger = logging.getLogger(__name__)


def parse_places(raws: Iterable[Any]) -> list[Place]:
    """Parse multiple payloads, skipping any that fail or lack an id."""
    results: list[Place] = []
    for raw in raws:
        try:
            place = parse_place(raw)
        except (AttributeError, TypeError, ValueError):
            logger.debug("Failed to parse place payload, skipping", exc_info=True)
            continue
        if place is not None:
            results.append(place)
    return results


def parse_place(raw: Mapping[str, Any]) -> Place | None:
    """Parse a single Places API payload.

    Returns None if the payload has no ``id``.
    """
    place_id = raw.get("id")
    if not isinstance(place_id, str) or not place_id:
        logger.debug("Place payload missing id, skipping")
        return None

    rating = raw.get("rating")
    count = raw.get("userRatingCount")
    types = raw.get("types")
    hours = raw.get("currentOpeningHours") or {}
    open_now = hours.get("openNow")

    return Place(
        place_id=place_id,
        name=_text(raw.get("displayName")),
        rating=rating if _is_number(rating) else None,
        user_rating_count=count if isinstance(count, int) and not isinstance(count, bool) else 0,
        price_level=raw.get("priceLevel"),
        location=_location(raw.get("location")),
        open_now=open_now if isinstance(open_now, bool) else None,
        types=[str(t) for t in types] if isinstance(types, list) else [],
        primary_type=raw.get("primaryType"),
        summary=_text(raw.get("editorialSummary")),
        website=raw.get("websiteUri"),
        phone=raw.get("nationalPhoneNumber"),
    )


def _text(localized: Any) -> str | None:
    """Extract ``text`` from a LocalizedText object."""
    if isinstance(localized, Mapping):
        text = localized.get("text")
        return text if isinstance(text, str) else None
    return None


def _location(raw: Any) -> LatLng | None:
    if not isinstance(raw, Mapping):
        return None
    lat = raw.get("latitude")
    lng = raw.get("longitude")
    if not (_is_number(lat) and _is_number(lng)):
        return None
    return LatLng(lat=lat, lng=lng)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
