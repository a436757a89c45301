from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from realty.app import app, clear_feeds
from realty.favorites.store import clear_favorites
from realty.listings.data_store import reset_properties

user_client = TestClient(app)
admin_client = TestClient(app)
anon_client = TestClient(app)

NEW_LISTING = {
    "title": "East Side Bungalow",
    "description": "Two bedroom bungalow",
    "price": 450_000,
    "location": "Austin, TX",
    "bedrooms": 2,
    "bathrooms": 1,
    "area": 1100,
    "category": "house",
    "listing_category": "sell",
    "features": "garden, porch",
}


def _login_user(c):
    c.post("/auth/login", json={"username": "user", "password": "user123"})


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


@pytest.fixture(autouse=True)
def _fresh_state():
    reset_properties()
    clear_favorites()
    clear_feeds()
    _login_user(user_client)
    _login_admin(admin_client)
    yield
    reset_properties()
    clear_favorites()
    clear_feeds()


def _rec_ids(body):
    return [item["property"]["id"] for item in body["recommendations"]]


# ── Create / update / delete ─────────────────────────────────────────────


def test_create_requires_login():
    assert anon_client.post("/properties", json=NEW_LISTING).status_code == 401


def test_create_listing():
    resp = user_client.post("/properties", json=NEW_LISTING)
    assert resp.status_code == 201
    body = resp.json()
    assert body["owner_id"] == "user-1"
    assert body["features"] == ["garden", "porch"]
    assert body["comments"] == []

    assert user_client.get(f"/properties/{body['id']}").json()["title"] == "East Side Bungalow"
    assert len(anon_client.get("/properties").json()) == 12


def test_create_rejects_invalid_listing():
    assert user_client.post("/properties", json={**NEW_LISTING, "category": "castle"}).status_code == 422
    assert user_client.post("/properties", json={**NEW_LISTING, "price": -5}).status_code == 422
    missing_title = {k: v for k, v in NEW_LISTING.items() if k != "title"}
    assert user_client.post("/properties", json=missing_title).status_code == 422


def test_owner_updates_own_listing():
    resp = user_client.put("/properties/p8", json={"price": 600_000, "title": "Zilker Cottage II"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["price"] == 600_000
    assert body["title"] == "Zilker Cottage II"
    assert body["location"] == "Austin, TX"
    assert anon_client.get("/properties/p8").json()["price"] == 600_000


def test_update_by_other_user_is_forbidden():
    resp = user_client.put("/properties/p2", json={"price": 1})
    assert resp.status_code == 403
    assert anon_client.get("/properties/p2").json()["price"] == 1_050_000


def test_admin_can_update_any_listing():
    resp = admin_client.put("/properties/p8", json={"bedrooms": 3})
    assert resp.status_code == 200
    assert resp.json()["bedrooms"] == 3
    assert resp.json()["owner_id"] == "user-1"


def test_update_unknown_listing_is_404():
    assert admin_client.put("/properties/missing", json={"price": 1}).status_code == 404


def test_update_rejects_invalid_values():
    assert user_client.put("/properties/p8", json={"bedrooms": -1}).status_code == 422


def test_delete_listing():
    created = user_client.post("/properties", json=NEW_LISTING).json()
    resp = user_client.delete(f"/properties/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"status": "deleted", "id": created["id"]}
    assert anon_client.get(f"/properties/{created['id']}").status_code == 404
    assert user_client.delete(f"/properties/{created['id']}").status_code == 404


def test_delete_by_other_user_is_forbidden():
    assert user_client.delete("/properties/p2").status_code == 403
    assert anon_client.get("/properties/p2").status_code == 200


def test_admin_can_delete_any_listing():
    assert admin_client.delete("/properties/p8").status_code == 200
    assert anon_client.get("/properties/p8").status_code == 404


# ── Comments ─────────────────────────────────────────────────────────────


def test_add_comment():
    resp = user_client.post("/properties/p2/comments", json={"text": "  Great light  ", "rating": 4})
    assert resp.status_code == 200
    comments = resp.json()["comments"]
    assert len(comments) == 1
    assert comments[0]["text"] == "Great light"
    assert comments[0]["rating"] == 4
    assert comments[0]["author"] == "Demo Buyer"
    assert comments[0]["user_id"] == "user-1"
    assert len(anon_client.get("/properties/p2").json()["comments"]) == 1


def test_comment_validation_and_auth():
    assert user_client.post("/properties/p2/comments", json={"text": "   "}).status_code == 422
    assert user_client.post("/properties/p2/comments", json={"text": "ok", "rating": 6}).status_code == 422
    assert anon_client.post("/properties/p2/comments", json={"text": "hi"}).status_code == 401
    assert user_client.post("/properties/missing/comments", json={"text": "hi"}).status_code == 404


def test_author_deletes_own_comment():
    comment = user_client.post("/properties/p2/comments", json={"text": "Nice"}).json()["comments"][0]
    resp = user_client.delete(f"/properties/p2/comments/{comment['id']}")
    assert resp.status_code == 200
    assert resp.json()["comments"] == []


def test_comment_delete_permissions():
    admin_comment = admin_client.post("/properties/p2/comments", json={"text": "Open house Sunday"}).json()
    comment_id = admin_comment["comments"][0]["id"]
    assert user_client.delete(f"/properties/p2/comments/{comment_id}").status_code == 403

    user_comment = user_client.post("/properties/p2/comments", json={"text": "Is it still available?"}).json()
    user_comment_id = user_comment["comments"][-1]["id"]
    resp = admin_client.delete(f"/properties/p2/comments/{user_comment_id}")
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()["comments"]] == [comment_id]


def test_delete_unknown_comment_is_404():
    assert user_client.delete("/properties/p2/comments/nope").status_code == 404
    assert user_client.delete("/properties/missing/comments/nope").status_code == 404


# ── Edits flow into recommendations ──────────────────────────────────────


def test_editing_a_listing_recomputes_recommendations():
    user_client.post("/favorites/p1")
    before = user_client.get("/recommendations").json()
    assert _rec_ids(before) == ["p2", "p10", "p6", "p4", "p8", "p5"]

    # Make p8 (owned by the demo user) a copy of the favorite's profile.
    resp = user_client.put("/properties/p8", json={
        "category": "villa",
        "price": 1_000_000,
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 2000,
        "features": "pool, garage",
    })
    assert resp.status_code == 200

    after = user_client.get("/recommendations").json()
    assert _rec_ids(after) == ["p8", "p2", "p10", "p6", "p4", "p5"]
    # 30 + 20 + 25 + 20 + 20 + 15 + 20 + 10
    assert after["recommendations"][0]["score"] == 160
    assert after["total_candidates"] == 10


def test_deleted_listing_leaves_recommendations():
    user_client.post("/favorites/p1")
    assert "p2" in _rec_ids(user_client.get("/recommendations").json())

    assert admin_client.delete("/properties/p2").status_code == 200

    body = user_client.get("/recommendations").json()
    assert "p2" not in _rec_ids(body)
    assert body["total_candidates"] == 9


def test_new_listing_can_be_recommended():
    user_client.post("/favorites/p1")
    created = admin_client.post("/properties", json={
        **NEW_LISTING,
        "category": "villa",
        "price": 1_000_000,
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 2000,
        "features": "pool, garage",
    }).json()

    body = user_client.get("/recommendations").json()
    assert _rec_ids(body)[0] == created["id"]
    assert body["total_candidates"] == 11
