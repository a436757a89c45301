from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable

import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_LISTINGS_CONFIG, ListingsConfig
from .models import Comment, CommentCreate, Property, PropertyCreate, PropertyUpdate

logger = logging.getLogger(__name__)

_properties: list[Property] | None = None
# Writers replace the whole list under this lock; readers take the current list.
_write_lock = threading.Lock()


def _split_list(value: object, separator: str) -> list[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [item.strip() for item in str(value).split(separator) if item.strip()]


def normalize_flag(value: object) -> bool:
    """Interpret a CSV flag cell (bool, 1/0, yes/no, true/false text)."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "y"}


def _row_to_property(row: pd.Series, separator: str) -> Property:
    owner = row.get("owner_id")
    return Property(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        price=float(row.get("price") or 0),
        location=str(row.get("location") or ""),
        bedrooms=int(row.get("bedrooms") or 0),
        bathrooms=int(row.get("bathrooms") or 0),
        area=float(row.get("area") or 0),
        category=row["category"],
        listing_category=row["listing_category"],
        features=_split_list(row.get("features"), separator),
        images=_split_list(row.get("images"), separator),
        owner_id=str(owner) if owner else None,
        is_featured=normalize_flag(row.get("is_featured")),
    )


def load_properties(config: ListingsConfig = DEFAULT_LISTINGS_CONFIG) -> list[Property]:
    """Read the processed listings CSV into ``Property`` models.

    Rows that fail validation are skipped and logged rather than aborting
    the whole load.
    """
    df = pd.read_csv(config.csv_path, dtype={"id": str, "owner_id": str})
    df = df.astype(object).where(pd.notna(df), None)

    properties: list[Property] = []
    for _, row in df.iterrows():
        try:
            properties.append(_row_to_property(row, config.list_separator))
        except (ValidationError, KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed listing row %s", row.get("id"), exc_info=True)
    logger.info("Loaded %d listings from %s", len(properties), config.csv_path)
    return properties


def get_properties() -> list[Property]:
    """Return the in-memory listings, loading them on first call."""
    global _properties
    if _properties is None:
        with _write_lock:
            if _properties is None:
                _properties = load_properties()
    return list(_properties)


def get_property(property_id: str) -> Property | None:
    for prop in get_properties():
        if prop.id == property_id:
            return prop
    return None


def set_properties(properties: list[Property]) -> None:
    """Replace the in-memory listings (used by tests and reloads)."""
    global _properties
    with _write_lock:
        _properties = list(properties)


def reset_properties() -> None:
    """Drop the in-memory listings so the next access reloads from disk."""
    global _properties
    with _write_lock:
        _properties = None


# ── Writes ───────────────────────────────────────────────────────────────


def _replace(property_id: str, change: Callable[[Property], Property]) -> Property | None:
    """Swap one listing for ``change(listing)``; None when the id is unknown."""
    global _properties
    current = get_properties()
    with _write_lock:
        current = list(_properties if _properties is not None else current)
        for i, prop in enumerate(current):
            if prop.id == property_id:
                updated = change(prop)
                current[i] = updated
                _properties = current
                return updated
    return None


def _revalidate(prop: Property, **changes: object) -> Property:
    return Property.model_validate({**prop.model_dump(), **changes})


def create_property(data: PropertyCreate, owner_id: str) -> Property:
    global _properties
    prop = Property(id=uuid.uuid4().hex, owner_id=owner_id, **data.model_dump())
    current = get_properties()
    with _write_lock:
        _properties = list(_properties if _properties is not None else current) + [prop]
    logger.info("Listing %s created by %s", prop.id, owner_id)
    return prop


def update_property(property_id: str, changes: PropertyUpdate) -> Property | None:
    """Apply the fields set on *changes*; returns the new listing or None."""
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)
    return _replace(property_id, lambda prop: _revalidate(prop, **fields))


def delete_property(property_id: str) -> bool:
    global _properties
    current = get_properties()
    with _write_lock:
        current = list(_properties if _properties is not None else current)
        kept = [p for p in current if p.id != property_id]
        if len(kept) == len(current):
            return False
        _properties = kept
    logger.info("Listing %s deleted", property_id)
    return True


def add_comment(property_id: str, user_id: str, author: str, data: CommentCreate) -> Property | None:
    comment = Comment(
        id=uuid.uuid4().hex,
        user_id=user_id,
        author=author,
        text=data.text,
        rating=data.rating,
    )
    return _replace(
        property_id,
        lambda prop: prop.model_copy(update={"comments": [*prop.comments, comment]}),
    )


def delete_comment(property_id: str, comment_id: str) -> Property | None:
    return _replace(
        property_id,
        lambda prop: prop.model_copy(
            update={"comments": [c for c in prop.comments if c.id != comment_id]}
        ),
    )
