from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from ..listings.models import Property


@dataclass
class Recommendation:
    property: Property
    score: int
    reasons: list[str] = field(default_factory=list)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RecommendationItem(BaseModel):
    property: Property
    score: int = Field(..., ge=0)
    reasons: list[str] = Field(default_factory=list)


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    favorite_count: int
    total_candidates: int
    summary: str | None = None
    in_progress: bool = False


class FavoriteToggleResponse(BaseModel):
    property_id: str
    is_favorite: bool
    favorites: list[str]
