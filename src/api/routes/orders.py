"""
Order Routes

The admin API cannot filter orders, so the listing over-fetches one large
upstream page and filters and paginates it here.
"""

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, Query
from loguru import logger as log

from common import global_config
from src.api.dependencies import get_admin_api, get_storage
from src.api.errors import ApiError, bad_request, upstream_call
from src.services.admin_api import AdminApiClient, UpstreamError, UpstreamNotFoundError
from src.services.orders import filter_orders, order_items, paginate
from src.services.storage import S3Service
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def with_asset_urls(order: dict[str, Any], storage: S3Service) -> dict[str, Any]:
    """Copy of an order with presigned preview/design links where it has keys."""
    decorated = dict(order)
    if "_id" in order:
        decorated["_id"] = str(order["_id"])

    for source, target, presign in (
        ("preview", "previewUrl", storage.get_order_preview_url),
        ("design", "designUrl", storage.get_order_design_url),
    ):
        key = order.get(source)
        if not key:
            continue
        try:
            decorated[target] = presign(key)
        except (BotoCoreError, ClientError) as e:
            # One bad key must not fail the listing
            log.error(f"Error generating {target} for order {decorated.get('_id')}: {e}")

    return decorated


@router.get("")
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(
        global_config.orders.default_page_size,
        alias="pageSize",
        ge=1,
        le=global_config.orders.max_page_size,
    ),
    search: str | None = Query(None),
    status: str | None = Query(None),
    date_filter: str = Query("all", alias="dateFilter"),
    admin_api: AdminApiClient = Depends(get_admin_api),
    storage: S3Service = Depends(get_storage),
):
    """
    List orders filtered by search term, status and date range.

    Only the requested page gets presigned asset URLs.
    """
    with upstream_call("Failed to fetch orders"):
        response = admin_api.fetch_orders(0, global_config.orders.fetch_limit)

    try:
        filtered = filter_orders(
            order_items(response), search=search, status=status, date_filter=date_filter
        )
    except ValueError as e:
        raise bad_request(str(e))

    result = paginate(filtered, page, page_size)
    result.items = [with_asset_urls(order, storage) for order in result.items]
    return result.to_dict()


@router.get("/{order_id}")
def get_order(order_id: str, admin_api: AdminApiClient = Depends(get_admin_api)):
    try:
        return admin_api.fetch_order(order_id)
    except UpstreamNotFoundError:
        raise ApiError(404, "Order not found")
    except UpstreamError as e:
        log.error(f"Error fetching order {order_id}: {e}")
        raise ApiError(500, "Failed to fetch order", details=str(e))


@router.post("/{order_id}")
def complete_order(
    order_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    """Mark an order completed. No local status check: the admin API decides."""
    try:
        result = admin_api.complete_order(order_id)
    except UpstreamError as e:
        log.error(f"Error completing order {order_id}: {e}")
        if e.status_code:
            raise ApiError(e.status_code, "Failed to complete order via Admin API")
        raise ApiError(500, "Failed to complete order")

    log.info(f"Completed order {order_id}")
    return result if result is not None else {"success": True}
