from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..listings.data_store import normalize_flag
from ..listings.models import ListingCategory, PropertyCategory
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "title",
    "description",
    "price",
    "location",
    "bedrooms",
    "bathrooms",
    "area",
    "category",
    "listing_category",
    "features",
    "images",
    "owner_id",
    "is_featured",
]

_CATEGORIES = {c.value for c in PropertyCategory}
_LISTING_CATEGORIES = {c.value for c in ListingCategory}


def _clean_list(value: object, separator: str) -> List[str]:
    """Split a raw list cell into trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    elif isinstance(value, float) and pd.isna(value):
        return []
    else:
        items = str(value).split(separator)
    return [item.strip() for item in items if item.strip()]


def normalize_listings(df: pd.DataFrame, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> pd.DataFrame:
    """Map a raw listings frame onto ``CANONICAL_COLUMNS``.

    Numeric fields are coerced (invalid or negative values become 0),
    list fields are split and trimmed, and rows with a missing id or an
    unknown category / listing category are dropped.
    """

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    def _column(candidates: List[str], default: object = "") -> pd.Series:
        col = _first_present(candidates)
        if col is None:
            return pd.Series([default] * len(df), index=df.index)
        return df[col]

    canonical = pd.DataFrame(index=df.index)
    canonical["id"] = _column(["id", "_id"]).fillna("").astype(str).str.strip()
    canonical["title"] = _column(["title", "name"]).fillna("").astype(str)
    canonical["description"] = _column(["description"]).fillna("").astype(str)
    canonical["location"] = _column(["location", "address"]).fillna("").astype(str).str.strip()

    for col, candidates in (
        ("price", ["price"]),
        ("area", ["area", "size"]),
    ):
        canonical[col] = pd.to_numeric(_column(candidates, 0), errors="coerce").fillna(0).clip(lower=0)

    for col, candidates in (
        ("bedrooms", ["bedrooms", "beds"]),
        ("bathrooms", ["bathrooms", "baths"]),
    ):
        canonical[col] = (
            pd.to_numeric(_column(candidates, 0), errors="coerce").fillna(0).clip(lower=0).astype(int)
        )

    canonical["category"] = _column(["category", "type"]).fillna("").astype(str).str.strip().str.lower()
    canonical["listing_category"] = (
        _column(["listing_category", "listingType", "listing_type"]).fillna("").astype(str).str.strip().str.lower()
    )

    joiner = config.processed_list_separator
    canonical["features"] = _column(["features"], None).apply(
        lambda v: joiner.join(_clean_list(v, config.raw_list_separator))
    )
    canonical["images"] = _column(["images"], None).apply(
        lambda v: joiner.join(_clean_list(v, config.raw_list_separator))
    )
    canonical["owner_id"] = _column(["owner_id", "owner"]).fillna("").astype(str).str.strip()
    canonical["is_featured"] = _column(["is_featured", "isFeatured"], False).apply(normalize_flag)

    valid = (
        (canonical["id"] != "")
        & canonical["category"].isin(_CATEGORIES)
        & canonical["listing_category"].isin(_LISTING_CATEGORIES)
    )
    dropped = int((~valid).sum())
    if dropped:
        logger.warning("Dropping %d listing rows with a missing id or unknown category", dropped)

    canonical = canonical.loc[valid].drop_duplicates(subset="id", keep="first")
    return canonical[CANONICAL_COLUMNS].reset_index(drop=True)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the listings ingestion pipeline.

    Steps:
    - Read the raw listings export.
    - Map raw fields into the canonical Property schema.
    - Persist cleaned data as CSV for downstream use.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    raw = pd.read_csv(config.raw_path, dtype=str, keep_default_na=False, na_values=[""])
    canonical = normalize_listings(raw, config)

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d listings to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
