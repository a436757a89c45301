from __future__ import annotations

from fastapi import HTTPException, Request


def get_current_user(request: Request) -> dict | None:
    """Return the user dict from the session, or ``None``."""
    return request.session.get("user")


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = get_current_user(request)
    if not user or not user.get("id"):
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not admin."""
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def ensure_owner_or_admin(user: dict, owner_id: str | None) -> None:
    """Raise 403 unless *user* owns the resource or is an admin."""
    if user.get("role") == "admin":
        return
    if owner_id is None or owner_id != user.get("id"):
        raise HTTPException(status_code=403, detail="Not authorized to modify this resource")
