from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable

from ..listings.models import Property
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .engine import count_candidates, recompute
from .models import Recommendation


@dataclass(frozen=True)
class FeedSnapshot:
    """One consistent view of a feed: the inputs and the result built from them."""

    user_id: str | None
    favorite_ids: tuple[str, ...]
    total_candidates: int
    recommendations: tuple[Recommendation, ...]
    recomputed: bool
    in_progress: bool = False


class RecommendationFeed:
    """Holds the latest recommendations for one caller.

    ``sync`` records the current properties, favorites and user, and
    recomputes everything whenever any of them changed since the last
    call. ``refresh`` recomputes unconditionally. There is no partial
    update: each recompute replaces the previous list wholesale. Both
    return a ``FeedSnapshot`` taken under the feed's lock, so the counts
    and the recommendations in it always belong together.
    """

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> None:
        self.config = config
        self.recommendations: list[Recommendation] = []
        self.in_progress = False
        self._properties: list[Property] = []
        self._favorite_ids: list[str] = []
        self._user_id: str | None = None
        self._synced = False
        self._lock = threading.RLock()

    @property
    def favorite_ids(self) -> list[str]:
        return list(self._favorite_ids)

    @property
    def user_id(self) -> str | None:
        return self._user_id

    def sync(
        self,
        properties: Iterable[Property],
        favorite_ids: Iterable[str],
        user_id: str | None,
        force: bool = False,
    ) -> FeedSnapshot:
        """Adopt new inputs, recomputing when they changed or *force* is set."""
        properties = list(properties)
        favorite_ids = list(favorite_ids)
        with self._lock:
            changed = (
                not self._synced
                or user_id != self._user_id
                or set(favorite_ids) != set(self._favorite_ids)
                or properties != self._properties
            )
            self._properties = properties
            self._favorite_ids = favorite_ids
            self._user_id = user_id
            self._synced = True
            if changed or force:
                return self.refresh()
            return self._snapshot(recomputed=False)

    def refresh(self) -> FeedSnapshot:
        """Recompute from the last synced inputs."""
        with self._lock:
            self.in_progress = True
            try:
                self.recommendations = recompute(
                    self._properties, self._favorite_ids, self._user_id, self.config,
                )
            finally:
                self.in_progress = False
            return self._snapshot(recomputed=True)

    def _snapshot(self, recomputed: bool) -> FeedSnapshot:
        return FeedSnapshot(
            user_id=self._user_id,
            favorite_ids=tuple(self._favorite_ids),
            total_candidates=count_candidates(self._properties, self._favorite_ids),
            recommendations=tuple(self.recommendations),
            recomputed=recomputed,
            in_progress=self.in_progress,
        )
