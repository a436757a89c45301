from __future__ import annotations

from collections import Counter
from typing import Any


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == "recommendations"]
    toggles = [e for e in events if e["type"] == "favorite_toggle"]
    total = len(runs)

    # Average response time
    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Result sizes
    sizes = [r.get("results_returned", 0) for r in runs]
    avg_results = round(sum(sizes) / total, 2) if total else 0.0
    empty_runs = sum(1 for s in sizes if s == 0)

    # What got recommended
    city_counter: Counter[str] = Counter()
    category_counter: Counter[str] = Counter()
    for r in runs:
        for city in r.get("cities", []) or []:
            city_counter[city] += 1
        for category in r.get("categories", []) or []:
            category_counter[category] += 1

    # Favorite activity
    added = sum(1 for t in toggles if t.get("is_favorite"))
    favorited_counter: Counter[str] = Counter(
        t["property_id"] for t in toggles if t.get("is_favorite")
    )

    return {
        "total_recommendation_runs": total,
        "avg_response_time_ms": avg_time,
        "avg_results_returned": avg_results,
        "empty_result_rate": round(empty_runs / total * 100, 1) if total else 0.0,
        "top_recommended_cities": _top(city_counter),
        "top_recommended_categories": _top(category_counter),
        "favorites_summary": {
            "toggles": len(toggles),
            "added": added,
            "removed": len(toggles) - added,
            "most_favorited": _top(favorited_counter, 5),
        },
    }
