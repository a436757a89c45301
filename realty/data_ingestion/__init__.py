"""
Listings ingestion package.

Responsibilities:
- Read a raw listings export (including the legacy document-store field names).
- Normalize it into the canonical Property schema.
- Persist the processed dataset locally for the API and the recommender.
"""
