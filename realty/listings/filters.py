from __future__ import annotations

from typing import Iterable

from .models import FilterOptions, Property


def has_filters(options: FilterOptions) -> bool:
    """True when at least one filter would narrow the listing set."""
    return any(
        value not in (None, "", 0)
        for value in options.model_dump().values()
    )


def apply_filters(properties: Iterable[Property], options: FilterOptions) -> list[Property]:
    """Return the properties matching every active filter, in input order.

    Numeric minimums and the maximum price only apply when positive; the
    location filter is a case-insensitive substring match.
    """
    result = list(properties)
    if not has_filters(options):
        return result

    if options.category:
        result = [p for p in result if p.category == options.category]
    if options.listing_category:
        result = [p for p in result if p.listing_category == options.listing_category]
    if options.min_price:
        result = [p for p in result if p.price >= options.min_price]
    if options.max_price:
        result = [p for p in result if p.price <= options.max_price]
    if options.min_bedrooms:
        result = [p for p in result if p.bedrooms >= options.min_bedrooms]
    if options.min_bathrooms:
        result = [p for p in result if p.bathrooms >= options.min_bathrooms]
    if options.min_area:
        result = [p for p in result if p.area >= options.min_area]
    if options.location:
        needle = options.location.strip().lower()
        result = [p for p in result if needle in p.location.lower()]
    return result
