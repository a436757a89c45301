from __future__ import annotations

import os
import time
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import ensure_owner_or_admin, require_admin, require_user
from .auth.users import authenticate
from .favorites.store import get_favorites, toggle_favorite
from .listings.data_store import (
    add_comment,
    create_property,
    delete_comment,
    delete_property,
    get_properties,
    get_property,
    update_property,
)
from .listings.filters import apply_filters
from .listings.models import (
    CommentCreate,
    FilterOptions,
    ListingCategory,
    Property,
    PropertyCategory,
    PropertyCreate,
    PropertyUpdate,
)
from .recommendations.engine import summarize
from .recommendations.feed import FeedSnapshot, RecommendationFeed
from .recommendations.models import (
    FavoriteToggleResponse,
    LoginRequest,
    RecommendationItem,
    RecommendationResponse,
)


app = FastAPI(title="Property Recommendation API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "realty-secret-change-in-production"),
)

# One feed per logged-in user; each holds only that user's latest result.
_feeds: dict[str, RecommendationFeed] = {}


def _feed_for(user_id: str) -> RecommendationFeed:
    return _feeds.setdefault(user_id, RecommendationFeed())


def clear_feeds() -> None:
    _feeds.clear()


def _build_response(snapshot: FeedSnapshot, start_time: float) -> RecommendationResponse:
    recs = snapshot.recommendations
    favorite_count = len(snapshot.favorite_ids)
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommendations", {
        "user_id": snapshot.user_id,
        "favorite_count": favorite_count,
        "results_returned": len(recs),
        "recomputed": snapshot.recomputed,
        "cities": [r.property.city for r in recs],
        "categories": [r.property.category.value for r in recs],
        "response_time_ms": elapsed_ms,
    })
    return RecommendationResponse(
        recommendations=[
            RecommendationItem(property=r.property, score=r.score, reasons=r.reasons)
            for r in recs
        ],
        favorite_count=favorite_count,
        total_candidates=snapshot.total_candidates,
        summary=summarize(favorite_count, len(recs)),
        in_progress=snapshot.in_progress,
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    properties = get_properties()
    cities = sorted({p.city for p in properties if p.city})
    features = sorted({f for p in properties for f in p.features})
    return {
        "categories": [c.value for c in PropertyCategory],
        "listing_categories": [c.value for c in ListingCategory],
        "cities": cities,
        "features": features,
    }


@app.get("/properties", response_model=list[Property])
def list_properties(filters: Annotated[FilterOptions, Query()]) -> list[Property]:
    return apply_filters(get_properties(), filters)


@app.get("/properties/{property_id}", response_model=Property)
def property_detail(property_id: str) -> Property:
    prop = get_property(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


# ── Listing writes ───────────────────────────────────────────────────────


def _existing_property(property_id: str) -> Property:
    prop = get_property(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@app.post("/properties", response_model=Property, status_code=201)
def property_create(body: PropertyCreate, user: dict = Depends(require_user)) -> Property:
    return create_property(body, owner_id=user["id"])


@app.put("/properties/{property_id}", response_model=Property)
def property_update(
    property_id: str,
    body: PropertyUpdate,
    user: dict = Depends(require_user),
) -> Property:
    ensure_owner_or_admin(user, _existing_property(property_id).owner_id)
    updated = update_property(property_id, body)
    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return updated


@app.delete("/properties/{property_id}")
def property_delete(property_id: str, user: dict = Depends(require_user)) -> dict:
    ensure_owner_or_admin(user, _existing_property(property_id).owner_id)
    if not delete_property(property_id):
        raise HTTPException(status_code=404, detail="Property not found")
    return {"status": "deleted", "id": property_id}


@app.post("/properties/{property_id}/comments", response_model=Property)
def comment_create(
    property_id: str,
    body: CommentCreate,
    user: dict = Depends(require_user),
) -> Property:
    _existing_property(property_id)
    updated = add_comment(property_id, user["id"], user.get("name", ""), body)
    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return updated


@app.delete("/properties/{property_id}/comments/{comment_id}", response_model=Property)
def comment_delete(
    property_id: str,
    comment_id: str,
    user: dict = Depends(require_user),
) -> Property:
    prop = _existing_property(property_id)
    comment = next((c for c in prop.comments if c.id == comment_id), None)
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    ensure_owner_or_admin(user, comment.user_id)
    updated = delete_comment(property_id, comment_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return updated


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/favorites")
def favorites(user: dict = Depends(require_user)) -> dict:
    return {"favorites": get_favorites(user["id"])}


@app.post("/favorites/{property_id}", response_model=FavoriteToggleResponse)
def favorite_toggle(property_id: str, user: dict = Depends(require_user)) -> FavoriteToggleResponse:
    if get_property(property_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")
    is_favorite = toggle_favorite(user["id"], property_id)
    record_event("favorite_toggle", {
        "user_id": user["id"],
        "property_id": property_id,
        "is_favorite": is_favorite,
    })
    return FavoriteToggleResponse(
        property_id=property_id,
        is_favorite=is_favorite,
        favorites=get_favorites(user["id"]),
    )


@app.get("/recommendations", response_model=RecommendationResponse)
def recommendations(user: dict = Depends(require_user)) -> RecommendationResponse:
    start_time = time.time()
    feed = _feed_for(user["id"])
    # Recomputes only when listings, favorites or the user changed.
    snapshot = feed.sync(get_properties(), get_favorites(user["id"]), user["id"])
    return _build_response(snapshot, start_time)


@app.post("/recommendations/refresh", response_model=RecommendationResponse)
def refresh_recommendations(user: dict = Depends(require_user)) -> RecommendationResponse:
    start_time = time.time()
    feed = _feed_for(user["id"])
    snapshot = feed.sync(get_properties(), get_favorites(user["id"]), user["id"], force=True)
    return _build_response(snapshot, start_time)


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
