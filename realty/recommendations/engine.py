"""
Favorite-driven recommendation engine.

Every call rebuilds the preference profile from the favorited properties
and rescores every other property from scratch; nothing is carried over
between calls. Inputs are snapshotted on entry so callers may keep
mutating their own collections.
"""
from __future__ import annotations

import logging
import time
from typing import Iterable

from ..listings.models import Property
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Recommendation
from .profile import build_profile
from .scoring import score_property

logger = logging.getLogger(__name__)


def rank(scored: Iterable[Recommendation], limit: int) -> list[Recommendation]:
    """Drop non-positive scores, order by descending score, keep the top *limit*.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    positive = [rec for rec in scored if rec.score > 0]
    return sorted(positive, key=lambda rec: rec.score, reverse=True)[:limit]


def recompute(
    properties: Iterable[Property],
    favorite_ids: Iterable[str],
    user_id: str | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Recommendation]:
    """Return ranked recommendations for *user_id*.

    An absent user, an empty favorites set, or favorites that match no
    known property all yield an empty list.
    """
    if not user_id:
        return []

    favorites = set(favorite_ids)
    if not favorites:
        return []

    snapshot = list(properties)
    favorited = [p for p in snapshot if p.id in favorites]
    if not favorited:
        return []

    start_time = time.time()
    profile = build_profile(favorited)
    scored = [
        score_property(p, profile, config)
        for p in snapshot
        if p.id not in favorites
    ]
    ranked = rank(scored, config.limit)

    logger.debug(
        "Scored %d candidates for user %s from %d favorites in %.1f ms",
        len(scored), user_id, len(favorited), (time.time() - start_time) * 1000,
    )
    return ranked


def count_candidates(properties: Iterable[Property], favorite_ids: Iterable[str]) -> int:
    """Number of properties eligible for scoring (everything not favorited)."""
    favorites = set(favorite_ids)
    return sum(1 for p in properties if p.id not in favorites)


def summarize(favorite_count: int, match_count: int) -> str | None:
    if match_count <= 0:
        return None
    favorites_word = "property" if favorite_count == 1 else "properties"
    matches_word = "match" if match_count == 1 else "matches"
    return (
        f"Based on your {favorite_count} favorite {favorites_word}, "
        f"we found {match_count} perfect {matches_word}"
    )
