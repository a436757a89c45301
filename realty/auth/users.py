from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_users() -> None:
    """Pre-seed demo accounts on import."""
    _users["user"] = {
        "id": "user-1",
        "name": "Demo Buyer",
        "password_hash": _hash_password("user123"),
        "role": "user",
    }
    _users["admin"] = {
        "id": "admin-1",
        "name": "Site Admin",
        "password_hash": _hash_password("admin123"),
        "role": "admin",
    }


def _public(username: str, record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "username": username,
        "name": record["name"],
        "role": record["role"],
    }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, username, name, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return _public(username, record)
    return None


_seed_users()
