"""
Design Routes

Proxy for design templates stored by the admin API.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from src.api.dependencies import get_admin_api
from src.api.errors import upstream_call
from src.services.admin_api import AdminApiClient

router = APIRouter(prefix="/api/designs", tags=["Designs"])

DESIGN_NOT_FOUND = "Design not found"


@router.get("")
def list_designs(admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch designs"):
        return admin_api.fetch_designs()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_design(
    design: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to create design"):
        return admin_api.create_design(design)


@router.get("/{design_id}")
def get_design(
    design_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call("Failed to fetch design", not_found_message=DESIGN_NOT_FOUND):
        return admin_api.fetch_design(design_id)


@router.put("/{design_id}")
def update_design(
    design_id: str,
    design: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to update design", not_found_message=DESIGN_NOT_FOUND):
        return admin_api.update_design(design_id, design)


@router.delete("/{design_id}")
def delete_design(
    design_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call("Failed to delete design", not_found_message=DESIGN_NOT_FOUND):
        admin_api.delete_design(design_id)
    return {"success": True, "message": "Design deleted successfully"}
