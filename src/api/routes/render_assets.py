"""
Render Asset Routes

Render assets are keyed by their PSD path, so keys contain slashes; the
`path` converter keeps them in one parameter.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from src.api.dependencies import get_admin_api
from src.api.errors import upstream_call
from src.services.admin_api import AdminApiClient

router = APIRouter(prefix="/api/render-assets", tags=["Render Assets"])

RENDER_ASSET_NOT_FOUND = "Render asset not found"


@router.get("")
def list_render_assets(admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch render assets"):
        return admin_api.fetch_render_assets()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_render_asset(
    asset: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to create render asset"):
        return admin_api.create_render_asset(asset)


@router.put("")
def upsert_render_asset(
    asset: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    """Create or update by the asset's own key."""
    with upstream_call("Failed to upsert render asset"):
        return admin_api.upsert_render_asset(asset)


@router.get("/{key:path}")
def get_render_asset(key: str, admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch render asset"):
        asset = admin_api.fetch_render_asset(key)
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=RENDER_ASSET_NOT_FOUND)
    return asset


@router.put("/{key:path}")
def update_render_asset(
    key: str,
    asset: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to update render asset", not_found_message=RENDER_ASSET_NOT_FOUND):
        return admin_api.update_render_asset(key, asset)


@router.delete("/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_render_asset(key: str, admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to delete render asset", not_found_message=RENDER_ASSET_NOT_FOUND):
        admin_api.delete_render_asset(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
