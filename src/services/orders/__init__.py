"""Order listing and partner sales helpers."""

from .filtering import (
    Page,
    date_floor,
    filter_orders,
    order_items,
    paginate,
    parse_created_at,
)
from .sales import (
    MonthlySales,
    PartnerSalesReport,
    aggregate_partner_sales,
    coerce_price,
    is_live_completed_order,
)

__all__ = [
    "MonthlySales",
    "Page",
    "PartnerSalesReport",
    "aggregate_partner_sales",
    "coerce_price",
    "date_floor",
    "filter_orders",
    "is_live_completed_order",
    "order_items",
    "paginate",
    "parse_created_at",
]
