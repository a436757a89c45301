from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and thresholds for favorite-based property scoring."""

    category_weight: float = 30.0
    listing_weight: float = 20.0
    price_weight: float = 25.0
    price_tolerance: float = 0.30  # relative to the favorites' mean price
    bedroom_weight: float = 10.0
    bathroom_weight: float = 10.0
    room_tolerance: float = 1.0  # absolute
    area_weight: float = 15.0
    area_tolerance: float = 0.40  # relative to the favorites' mean area
    city_weight: float = 20.0
    feature_weight: float = 5.0
    features_in_reason: int = 2
    limit: int = 6


DEFAULT_SCORING_CONFIG = ScoringConfig()
