"""
Partner Routes

Partner CRUD is proxied to the admin API. The dashboard may send the revenue
share as a percentage; it is stored upstream as a fraction.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, model_validator

from common import global_config
from src.api.dependencies import get_admin_api
from src.api.errors import upstream_call
from src.services.admin_api import AdminApiClient
from src.services.orders import aggregate_partner_sales, order_items
from src.services.partners import percentage_to_share, share_to_percentage

router = APIRouter(prefix="/api/partners", tags=["Partners"])

PARTNER_NOT_FOUND = "Partner not found"


class PartnerRequest(BaseModel):
    """Partner fields are passed through; only the revenue share is checked."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    revenue_share: float | None = Field(None, alias="revenueShare", ge=0, le=1)
    revenue_share_percent: float | None = Field(None, alias="revenueSharePercent")

    @model_validator(mode="after")
    def convert_percentage(self) -> "PartnerRequest":
        if self.revenue_share_percent is not None:
            self.revenue_share = percentage_to_share(self.revenue_share_percent)
        return self

    def to_upstream(self) -> dict[str, Any]:
        return self.model_dump(
            by_alias=True, exclude_none=True, exclude={"revenue_share_percent"}
        )


def with_percentage(partner: Any) -> Any:
    if isinstance(partner, list):
        return [with_percentage(p) for p in partner]
    if isinstance(partner, dict):
        share = partner.get("revenueShare")
        if isinstance(share, (int, float)) and not isinstance(share, bool):
            return {**partner, "revenueSharePercent": share_to_percentage(share)}
    return partner


@router.get("")
def list_partners(admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch partners"):
        return with_percentage(admin_api.fetch_partners())


@router.post("", status_code=status.HTTP_201_CREATED)
def create_partner(
    payload: PartnerRequest, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call("Failed to create partner"):
        return with_percentage(admin_api.create_partner(payload.to_upstream()))


@router.get("/{partner_id}")
def get_partner(partner_id: str, admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch partner", not_found_message=PARTNER_NOT_FOUND):
        return with_percentage(admin_api.fetch_partner(partner_id))


@router.put("/{partner_id}")
def update_partner(
    partner_id: str,
    payload: PartnerRequest,
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to update partner", not_found_message=PARTNER_NOT_FOUND):
        return with_percentage(
            admin_api.update_partner(partner_id, payload.to_upstream())
        )


@router.delete("/{partner_id}")
def delete_partner(
    partner_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call("Failed to delete partner", not_found_message=PARTNER_NOT_FOUND):
        result = admin_api.delete_partner(partner_id)
    return result if result is not None else {"success": True}


@router.get("/{partner_id}/sales")
def get_partner_sales(
    partner_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    """Monthly totals of the partner's live, completed orders, newest month first."""
    with upstream_call("Failed to fetch partner sales"):
        response = admin_api.fetch_orders(0, global_config.orders.sales_fetch_limit)

    return aggregate_partner_sales(order_items(response), partner_id).to_dict()
