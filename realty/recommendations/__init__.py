"""
Favorite-based property recommendations.

Responsibilities:
- Infer a preference profile from the properties a user has favorited.
- Score every other property against that profile with fixed heuristics.
- Rank the positive scores and keep the top matches with their reasons.
- Track the latest result per user and recompute when inputs change.
"""
