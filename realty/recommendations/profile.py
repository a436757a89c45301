from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from ..listings.models import Property


@dataclass
class PreferenceProfile:
    """Aggregate taste inferred from a user's favorited properties."""

    category_counts: dict[str, int] = field(default_factory=dict)
    listing_counts: dict[str, int] = field(default_factory=dict)
    city_counts: dict[str, int] = field(default_factory=dict)
    feature_counts: dict[str, int] = field(default_factory=dict)
    avg_price: float = 0.0
    avg_bedrooms: float = 0.0
    avg_bathrooms: float = 0.0
    avg_area: float = 0.0
    favorite_count: int = 0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def build_profile(favorites: Sequence[Property]) -> PreferenceProfile:
    """Build a ``PreferenceProfile`` from the favorited properties.

    Categories, listing types, cities and features are counted; price,
    bedrooms, bathrooms and area are plain arithmetic means. Feature keys
    are compared exactly (case-sensitive). Raises ``ValueError`` for an
    empty sequence; callers short-circuit before getting here.
    """
    if not favorites:
        raise ValueError("cannot build a preference profile without favorites")

    categories: Counter[str] = Counter()
    listings: Counter[str] = Counter()
    cities: Counter[str] = Counter()
    features: Counter[str] = Counter()

    for prop in favorites:
        categories[prop.category.value] += 1
        listings[prop.listing_category.value] += 1
        cities[prop.city] += 1
        for feature in prop.features:
            features[feature] += 1

    return PreferenceProfile(
        category_counts=dict(categories),
        listing_counts=dict(listings),
        city_counts=dict(cities),
        feature_counts=dict(features),
        avg_price=_mean([p.price for p in favorites]),
        avg_bedrooms=_mean([p.bedrooms for p in favorites]),
        avg_bathrooms=_mean([p.bathrooms for p in favorites]),
        avg_area=_mean([p.area for p in favorites]),
        favorite_count=len(favorites),
    )
