from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertyCategory(str, Enum):
    villa = "villa"
    apartment = "apartment"
    house = "house"
    land = "land"
    commercial = "commercial"


class ListingCategory(str, Enum):
    sell = "sell"
    rent = "rent"


def city_of(location: str) -> str:
    """Return the city part of a location string (text before the first comma)."""
    return (location or "").split(",")[0].strip()


def _split_features(value: object) -> object:
    # The listing form sends features as one comma-separated string.
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Comment(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    user_id: str
    author: str = ""
    text: str = Field(..., min_length=1)
    rating: int = Field(default=5, ge=1, le=5)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    price: float = Field(default=0.0, ge=0.0)
    location: str = ""
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    area: float = Field(default=0.0, ge=0.0, description="Floor area; 0 when unknown")
    category: PropertyCategory
    listing_category: ListingCategory
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    owner_id: str | None = None
    is_featured: bool = False
    comments: list[Comment] = Field(default_factory=list)

    @property
    def city(self) -> str:
        return city_of(self.location)


class PropertyCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    price: float = Field(..., ge=0.0)
    location: str = Field(..., min_length=1)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    area: float = Field(default=0.0, ge=0.0)
    category: PropertyCategory
    listing_category: ListingCategory
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, description="Already-hosted image paths")

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, value: object) -> object:
        return _split_features(value)


class PropertyUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0.0)
    location: str | None = Field(default=None, min_length=1)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    area: float | None = Field(default=None, ge=0.0)
    category: PropertyCategory | None = None
    listing_category: ListingCategory | None = None
    features: list[str] | None = None
    images: list[str] | None = None

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, value: object) -> object:
        return _split_features(value)


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
    rating: int = Field(default=5, ge=1, le=5)

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment text is required")
        return value


class FilterOptions(BaseModel):
    category: PropertyCategory | None = None
    listing_category: ListingCategory | None = None
    min_price: float | None = Field(default=None, ge=0.0)
    max_price: float | None = Field(default=None, ge=0.0)
    min_bedrooms: int | None = Field(default=None, ge=0)
    min_bathrooms: int | None = Field(default=None, ge=0)
    min_area: float | None = Field(default=None, ge=0.0)
    location: str | None = None
