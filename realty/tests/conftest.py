from __future__ import annotations

from typing import Callable

import pytest

from realty.listings.models import Property

PropertyFactory = Callable[..., Property]


def _build_property(pid: str, **overrides) -> Property:
    data = {
        "id": pid,
        "category": "villa",
        "listing_category": "sell",
        "price": 1_000_000,
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 2000,
        "location": "Austin, TX",
        "features": ["pool", "garage"],
    }
    data.update(overrides)
    return Property(**data)


@pytest.fixture
def make_property() -> PropertyFactory:
    """Build a villa for sale in Austin; keyword overrides replace any field."""
    return _build_property


@pytest.fixture
def make_stranger() -> PropertyFactory:
    """Build a listing that shares nothing with ``make_property``'s defaults."""

    def _stranger(pid: str, **overrides) -> Property:
        data = {
            "category": "land",
            "listing_category": "rent",
            "price": 1,
            "bedrooms": 9,
            "bathrooms": 9,
            "area": 1,
            "location": "Elsewhere",
            "features": [],
        }
        data.update(overrides)
        return _build_property(pid, **data)

    return _stranger


@pytest.fixture
def favorite(make_property: PropertyFactory) -> Property:
    return make_property("fav")
