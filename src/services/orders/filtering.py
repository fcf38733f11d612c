"""
Order filtering and pagination.

The upstream orders endpoint cannot filter, so the listing over-fetches a
large page and narrows it here: search, then status, then a date floor, then
a slice for the requested page. Upstream order is preserved throughout.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

SEARCH_FIELDS = ("userEmail", "artist", "title", "templateName")
DATE_FILTERS = ("today", "week", "month", "all")


@dataclass
class Page:
    """One page of a filtered order list."""

    items: list[dict[str, Any]]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
        }


def parse_created_at(value: Any) -> datetime | None:
    """Parse an order timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_floor(date_filter: str, now: datetime | None = None) -> datetime | None:
    """Earliest createdAt accepted by a date filter; None means no floor."""
    now = now or datetime.now(timezone.utc)
    if date_filter == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_filter == "week":
        return now - timedelta(days=7)
    if date_filter == "month":
        return now - timedelta(days=30)
    if date_filter == "all":
        return None
    raise ValueError(
        f"Unknown date filter '{date_filter}', expected one of {', '.join(DATE_FILTERS)}"
    )


def _matches_search(order: dict[str, Any], term: str) -> bool:
    for field in SEARCH_FIELDS:
        value = order.get(field)
        if isinstance(value, str) and term in value.lower():
            return True
    return False


def filter_orders(
    orders: Iterable[dict[str, Any]],
    search: str | None = None,
    status: str | None = None,
    date_filter: str | None = "all",
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """
    Narrow an order list by search term, status and date floor.

    The result is a subsequence of the input (relative order kept), and
    applying the same filter again returns the same list.

    Raises:
        ValueError: If date_filter is not one of today, week, month, all
    """
    floor = date_floor(date_filter or "all", now)
    filtered = list(orders)

    term = (search or "").strip().lower()
    if term:
        filtered = [o for o in filtered if _matches_search(o, term)]

    if status and status != "all":
        filtered = [o for o in filtered if o.get("status") == status]

    if floor is not None:
        kept = []
        for order in filtered:
            created_at = parse_created_at(order.get("createdAt"))
            if created_at is not None and created_at >= floor:
                kept.append(order)
        filtered = kept

    return filtered


def paginate(items: list[dict[str, Any]], page: int, page_size: int) -> Page:
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    skip = (page - 1) * page_size
    return Page(
        items=items[skip : skip + page_size],
        total=len(items),
        page=page,
        page_size=page_size,
    )


def order_items(response: Any) -> list[dict[str, Any]]:
    """Orders come back as `{"items": [...]}`; tolerate a bare list too."""
    if isinstance(response, dict):
        return response.get("items") or []
    if isinstance(response, list):
        return response
    return []
