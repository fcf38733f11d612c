"""Monthly sales aggregation for partner (affiliate) orders."""

import calendar
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from src.services.orders.filtering import parse_created_at

LIVE_SESSION_PREFIX = "cs_live_"
COMPLETED_STATUS = "completed"


@dataclass
class MonthlySales:
    year: int
    month: int
    total_sales: float = 0.0
    order_count: int = 0

    @property
    def key(self) -> str:
        return f"{self.year}-{self.month:02d}"

    @property
    def month_name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "monthName": self.month_name,
            "totalSales": self.total_sales,
            "orderCount": self.order_count,
        }


@dataclass
class PartnerSalesReport:
    partner_id: str
    monthly_sales: list[MonthlySales] = field(default_factory=list)

    @property
    def total_sales(self) -> float:
        return sum(m.total_sales for m in self.monthly_sales)

    @property
    def total_orders(self) -> int:
        return sum(m.order_count for m in self.monthly_sales)

    def to_dict(self) -> dict[str, Any]:
        return {
            "partnerId": self.partner_id,
            "monthlySales": [m.to_dict() for m in self.monthly_sales],
            "totalSales": self.total_sales,
            "totalOrders": self.total_orders,
        }


def coerce_price(value: Any) -> float:
    """Numeric coercion of an order price; missing, non-finite or junk becomes 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def is_live_completed_order(order: dict[str, Any], partner_id: str) -> bool:
    """A paid order attributed to the partner: live Stripe session, completed."""
    session_id = order.get("stripeSessionId")
    return (
        order.get("affiliate_id") == partner_id
        and isinstance(session_id, str)
        and session_id.startswith(LIVE_SESSION_PREFIX)
        and order.get("status") == COMPLETED_STATUS
    )


def aggregate_partner_sales(
    orders: Iterable[dict[str, Any]], partner_id: str
) -> PartnerSalesReport:
    """
    Group a partner's live completed orders by calendar month (UTC).

    Buckets are sorted newest first. Orders whose createdAt cannot be parsed
    have no month and are left out.
    """
    buckets: dict[str, MonthlySales] = {}

    for order in orders:
        if not is_live_completed_order(order, partner_id):
            continue

        created_at = parse_created_at(order.get("createdAt"))
        if created_at is None:
            continue

        bucket = MonthlySales(year=created_at.year, month=created_at.month)
        bucket = buckets.setdefault(bucket.key, bucket)
        bucket.total_sales += coerce_price(order.get("price"))
        bucket.order_count += 1

    return PartnerSalesReport(
        partner_id=partner_id,
        monthly_sales=[buckets[key] for key in sorted(buckets, reverse=True)],
    )
