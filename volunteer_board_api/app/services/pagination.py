"""
Page‑based pagination helpers.

Turns client supplied ``page``/``perPage`` query values into a bounded
offset/limit window and derives the navigation metadata returned in
``Page`` envelopes.  Nothing here touches the database.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..core.db import MAX_INTEGER
from ..schemas.page import Page

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 50


def coerce_positive_int(value: Any, fallback: int, maximum: Optional[int] = None) -> int:
    """Interpret ``value`` as a positive integer.

    Accepts ints and numeric strings, or a list of them (repeated query
    parameters), in which case the first element is used.  Missing,
    non‑numeric, non‑finite, zero or negative input yields ``fallback``.
    Fractions are truncated.  The result is capped at ``maximum`` when
    one is given.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number < 1:
        return fallback
    result = int(number)
    if maximum is not None:
        result = min(result, maximum)
    return result


@dataclass(frozen=True)
class PageWindow:
    """A normalised page request."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def resolve_window(
    page: Any = None,
    per_page: Any = None,
    *,
    default_per_page: int = DEFAULT_PAGE_SIZE,
    max_per_page: int = MAX_PAGE_SIZE,
) -> PageWindow:
    """Normalise raw ``page``/``per_page`` values into a ``PageWindow``.

    ``per_page`` is clamped to ``max_per_page`` whatever was requested.
    ``page`` is only capped where its offset would no longer fit in an
    SQLite integer; asking past the end of the data simply produces an
    empty page.
    """
    size = coerce_positive_int(per_page, min(default_per_page, max_per_page), max_per_page)
    number = coerce_positive_int(page, 1, max_page_for(size))
    return PageWindow(page=number, per_page=size)


def max_page_for(per_page: int) -> int:
    """Highest page number whose offset still fits in an SQLite INTEGER."""
    return MAX_INTEGER // per_page + 1


def total_pages_for(total_items: int, per_page: int) -> int:
    if per_page <= 0:
        return 1
    return max(math.ceil(total_items / per_page), 1)


def build_page(items: Sequence[Any], window: PageWindow, total_items: int, item_type: Optional[type] = None) -> Page:
    """Wrap one window of ``items`` with its navigation metadata."""
    total_pages = total_pages_for(total_items, window.per_page)
    has_more = window.page < total_pages
    model = Page[item_type] if item_type is not None else Page
    return model(
        items=list(items),
        page=window.page,
        per_page=window.per_page,
        total_items=total_items,
        total_pages=total_pages,
        has_more=has_more,
        next_page=window.page + 1 if has_more else None,
    )


def single_page(items: Sequence[Any], item_type: Optional[type] = None) -> Page:
    """Present a flat, unpaginated list as the one and only page.

    Older servers answer list requests with a bare JSON array; callers
    that expect an envelope use this to keep a single code path.
    """
    items = list(items)
    model = Page[item_type] if item_type is not None else Page
    return model(
        items=items,
        page=1,
        per_page=len(items),
        total_items=len(items),
        total_pages=1,
        has_more=False,
        next_page=None,
    )
