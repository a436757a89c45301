from __future__ import annotations

from realty.recommendations.profile import build_profile
from realty.recommendations.scoring import score_property


def test_full_match_scores_every_rule(make_property, favorite):
    candidate = make_property("c1", price=1_050_000, area=2100, features=["pool", "garden"])
    rec = score_property(candidate, build_profile([favorite]))

    # 30 + 20 + 23.75 + 20 + 20 + 14.25 + 20 + 5
    assert rec.score == 153
    assert rec.reasons == [
        "Matches your preferred property type (villa)",
        "Matches your preferred listing type (sell)",
        "Similar price range to your favorites",
        "Similar bedroom count to your preferences",
        "Similar bathroom count to your preferences",
        "Similar size to your favorite properties",
        "Located in Austin (your preferred area)",
        "Has features you love: pool",
    ]
    assert rec.property is candidate


def test_unrelated_candidate_scores_zero(make_stranger, favorite):
    candidate = make_stranger(
        "c2",
        price=10_000,
        bedrooms=8,
        bathrooms=6,
        area=90_000,
        location="Marfa, TX",
        features=["barn"],
    )
    rec = score_property(candidate, build_profile([favorite]))
    assert rec.score == 0
    assert rec.reasons == []


def test_category_weight_scales_with_count(make_property, make_stranger, favorite):
    profile = build_profile([favorite, make_property("fav2")])
    rec = score_property(make_stranger("c3", category="villa"), profile)
    assert rec.score == 60
    assert rec.reasons == ["Matches your preferred property type (villa)"]


def test_price_threshold_is_strict(make_stranger, favorite):
    profile = build_profile([favorite])
    at_edge = make_stranger("c4", price=1_300_000)
    assert score_property(at_edge, profile).score == 0

    inside = at_edge.model_copy(update={"price": 1_200_000})
    rec = score_property(inside, profile)
    # (1 - 0.2) * 25
    assert rec.score == 20
    assert rec.reasons == ["Similar price range to your favorites"]


def test_bedroom_threshold_is_inclusive(make_stranger, favorite):
    rec = score_property(make_stranger("c5", bedrooms=4), build_profile([favorite]))
    assert rec.score == 10
    assert rec.reasons == ["Similar bedroom count to your preferences"]


def test_unknown_area_contributes_nothing(make_stranger, favorite):
    candidate = make_stranger("c6", area=0)
    assert score_property(candidate, build_profile([favorite])).score == 0


def test_zero_mean_price_skips_price_rule(make_property, make_stranger):
    profile = build_profile([make_property("free", price=0)])
    assert score_property(make_stranger("c7", price=0), profile).score == 0


def test_feature_reason_lists_first_two_overlaps(make_property, make_stranger):
    profile = build_profile([make_property("f", features=["pool", "garage", "garden", "gym"])])
    candidate = make_stranger("c8", features=["gym", "sauna", "pool", "garden"])
    rec = score_property(candidate, profile)
    assert rec.score == 15
    assert rec.reasons == ["Has features you love: gym, pool"]


def test_feature_match_is_case_sensitive(make_property, make_stranger):
    profile = build_profile([make_property("f", features=["Pool"])])
    assert score_property(make_stranger("c9", features=["pool"]), profile).score == 0


def test_half_points_round_up(make_property, make_stranger):
    # price diff 0.1 -> 0.9 * 25 = 22.5
    profile = build_profile([make_property("f", price=1000)])
    assert score_property(make_stranger("c10", price=1100), profile).score == 23


def test_scoring_is_deterministic(make_property, favorite):
    profile = build_profile([favorite])
    candidate = make_property("c11", price=900_000, bedrooms=2)
    first = score_property(candidate, profile)
    second = score_property(candidate, profile)
    assert (first.score, first.reasons) == (second.score, second.reasons)
