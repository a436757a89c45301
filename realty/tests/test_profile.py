from __future__ import annotations

import pytest

from realty.recommendations.profile import build_profile


def test_counts_categories_listings_and_cities(make_property):
    profile = build_profile([
        make_property("a"),
        make_property("b", category="house", location="  Austin  , TX"),
        make_property("c", listing_category="rent", location="Dallas"),
    ])
    assert profile.category_counts == {"villa": 2, "house": 1}
    assert profile.listing_counts == {"sell": 2, "rent": 1}
    assert profile.city_counts == {"Austin": 2, "Dallas": 1}
    assert profile.favorite_count == 3


def test_feature_counts_are_exact_strings(make_property):
    profile = build_profile([
        make_property("a", features=["pool", "Garage"]),
        make_property("b", features=["pool", "garage"]),
    ])
    assert profile.feature_counts == {"pool": 2, "Garage": 1, "garage": 1}


def test_averages_are_plain_means(make_property):
    profile = build_profile([
        make_property("a", price=100, bedrooms=1, bathrooms=1, area=40),
        make_property("b", price=300, bedrooms=4, bathrooms=2, area=60),
    ])
    assert profile.avg_price == 200
    assert profile.avg_bedrooms == 2.5
    assert profile.avg_bathrooms == 1.5
    assert profile.avg_area == 50


def test_empty_favorites_rejected():
    with pytest.raises(ValueError):
        build_profile([])


def test_city_is_text_before_first_comma(make_property):
    assert make_property("a", location="Lakeway, Travis County, TX").city == "Lakeway"
    assert make_property("b", location="Nowhere").city == "Nowhere"
    assert make_property("c", location="").city == ""
