from __future__ import annotations

_favorites: dict[str, list[str]] = {}


def get_favorites(user_id: str) -> list[str]:
    """Return the user's favorite property ids in the order they were added."""
    return list(_favorites.get(user_id, []))


def toggle_favorite(user_id: str, property_id: str) -> bool:
    """Add or remove *property_id*; returns True when it is now a favorite."""
    current = _favorites.setdefault(user_id, [])
    if property_id in current:
        current.remove(property_id)
        return False
    current.append(property_id)
    return True


def set_favorites(user_id: str, property_ids: list[str]) -> None:
    # dict.fromkeys drops duplicates but keeps first-seen order
    _favorites[user_id] = list(dict.fromkeys(property_ids))


def clear_favorites() -> None:
    _favorites.clear()
