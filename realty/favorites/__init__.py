"""Per-user favorite property ids, kept in memory and keyed by user id."""
