from __future__ import annotations

import math

from ..listings.models import Property
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Recommendation
from .profile import PreferenceProfile


def _relative_diff(value: float, mean: float) -> float | None:
    """Return ``|value - mean| / mean``, or None when it is undefined."""
    if not (math.isfinite(value) and math.isfinite(mean)) or mean <= 0:
        return None
    return abs(value - mean) / mean


def _absolute_diff(value: float, mean: float) -> float | None:
    if not (math.isfinite(value) and math.isfinite(mean)):
        return None
    return abs(value - mean)


def _round_half_up(value: float) -> int:
    # Half-way sums go up, never to the nearest even integer.
    return int(math.floor(value + 0.5))


def score_property(
    candidate: Property,
    profile: PreferenceProfile,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Recommendation:
    """Score one candidate against the preference profile.

    Each rule adds to the score only when its precondition holds and then
    appends one reason, so reasons always follow rule order. Rules whose
    inputs are missing or unusable contribute nothing.
    """
    score = 0.0
    reasons: list[str] = []

    category = candidate.category.value
    category_count = profile.category_counts.get(category, 0)
    if category_count > 0:
        score += category_count * config.category_weight
        reasons.append(f"Matches your preferred property type ({category})")

    listing = candidate.listing_category.value
    listing_count = profile.listing_counts.get(listing, 0)
    if listing_count > 0:
        score += listing_count * config.listing_weight
        reasons.append(f"Matches your preferred listing type ({listing})")

    price_diff = _relative_diff(candidate.price, profile.avg_price)
    if price_diff is not None and price_diff < config.price_tolerance:
        score += (1 - price_diff) * config.price_weight
        reasons.append("Similar price range to your favorites")

    bedroom_diff = _absolute_diff(candidate.bedrooms, profile.avg_bedrooms)
    if bedroom_diff is not None and bedroom_diff <= config.room_tolerance:
        score += (2 - bedroom_diff) * config.bedroom_weight
        reasons.append("Similar bedroom count to your preferences")

    bathroom_diff = _absolute_diff(candidate.bathrooms, profile.avg_bathrooms)
    if bathroom_diff is not None and bathroom_diff <= config.room_tolerance:
        score += (2 - bathroom_diff) * config.bathroom_weight
        reasons.append("Similar bathroom count to your preferences")

    area_diff = _relative_diff(candidate.area, profile.avg_area)
    if area_diff is not None and area_diff < config.area_tolerance:
        score += (1 - area_diff) * config.area_weight
        reasons.append("Similar size to your favorite properties")

    city = candidate.city
    city_count = profile.city_counts.get(city, 0)
    if city_count > 0:
        score += city_count * config.city_weight
        reasons.append(f"Located in {city} (your preferred area)")

    shared = [f for f in candidate.features if profile.feature_counts.get(f, 0) > 0]
    if shared:
        score += len(shared) * config.feature_weight
        reasons.append(
            "Has features you love: " + ", ".join(shared[: config.features_in_reason])
        )

    return Recommendation(property=candidate, score=_round_half_up(score), reasons=reasons)
