"""Session-based demo accounts and the FastAPI guards that read them."""
