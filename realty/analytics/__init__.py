"""In-memory event log and the admin dashboard statistics built from it."""
