"""
Collection Routes

Reads go through the public collections API; writes go straight to the
MongoDB collection store and are unavailable (501) when it is disabled.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger as log
from pydantic import BaseModel, ConfigDict, Field
from pymongo.errors import PyMongoError

from src.api.dependencies import get_admin_api, get_collection_store
from src.api.errors import bad_request, upstream_call
from src.db.collections_store import CollectionStore
from src.services.admin_api import AdminApiClient
from src.services.collections import reorder, sort_by_position
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(prefix="/api/collections", tags=["Collections"])

COLLECTION_NOT_FOUND = "Collection not found"


class CollectionCreateRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    slug: str = Field(min_length=1)
    name: str = Field(min_length=1)
    position: int | None = None


class PositionUpdate(BaseModel):
    slug: str = Field(min_length=1)
    position: int


class PositionBatchRequest(BaseModel):
    updates: list[PositionUpdate]


class ReorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slug: str = Field(min_length=1)
    to_index: int = Field(alias="toIndex", ge=0)


class DesignIdsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    design_ids: list[str] = Field(alias="designIds")


class ActiveStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(alias="isActive")


@contextmanager
def store_call(failure_message: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        log.error(f"{failure_message}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message
        ) from e


def collection_list(response: Any) -> list[dict[str, Any]]:
    """The collections API answers with a bare list or an `items` envelope."""
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        for key in ("items", "collections"):
            if isinstance(response.get(key), list):
                return response[key]
    return []


@router.get("")
def list_collections(
    include_inactive: bool = Query(False, alias="includeInactive"),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to fetch collections"):
        return admin_api.fetch_collections(include_inactive)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_collection(
    payload: CollectionCreateRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    data = payload.model_dump(exclude_none=True)
    with store_call("Failed to create collection"):
        if payload.position is None:
            # New collections go to the end of the list
            data["position"] = store.count()
        return store.create(data)


@router.patch("")
def update_positions(
    payload: PositionBatchRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    updates = [update.model_dump() for update in payload.updates]
    with store_call("Failed to update positions"):
        matched = store.update_positions(updates)
    return {"success": True, "updated": matched}


@router.post("/reorder")
def reorder_collection(
    payload: ReorderRequest,
    admin_api: AdminApiClient = Depends(get_admin_api),
    store: CollectionStore = Depends(get_collection_store),
):
    """
    Move one collection to a new index and persist every position.

    The current order is read from the collections API (inactive ones
    included), so every collection ends up with a fresh integer position.
    """
    with upstream_call("Failed to fetch collections"):
        response = admin_api.fetch_collections(include_inactive=True)
    collections = sort_by_position(collection_list(response))

    try:
        updates = reorder(collections, payload.slug, payload.to_index)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=COLLECTION_NOT_FOUND
        )
    except IndexError as e:
        raise bad_request(str(e))

    with store_call("Failed to update positions"):
        store.update_positions(updates)
    log.info(f"Moved collection {payload.slug} to index {payload.to_index}")
    return {"success": True, "updates": updates}


@router.get("/{slug}")
def get_collection(slug: str, admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch collection", not_found_message=COLLECTION_NOT_FOUND):
        return admin_api.fetch_collection(slug)


def _require_match(matched: bool) -> None:
    if not matched:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=COLLECTION_NOT_FOUND)


@router.put("/{slug}")
def update_collection_designs(
    slug: str,
    payload: DesignIdsRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    with store_call("Failed to update collection"):
        matched = store.update_designs(slug, payload.design_ids)
    _require_match(matched)
    return {"success": True, "slug": slug, "designIds": payload.design_ids}


@router.patch("/{slug}")
def update_collection_status(
    slug: str,
    payload: ActiveStatusRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    with store_call("Failed to update collection"):
        matched = store.set_active_status(slug, payload.is_active)
    _require_match(matched)
    return {"success": True, "slug": slug, "isActive": payload.is_active}


@router.delete("/{slug}")
def delete_collection(
    slug: str, store: CollectionStore = Depends(get_collection_store)
):
    with store_call("Failed to delete collection"):
        deleted = store.delete(slug)
    _require_match(deleted)
    return {"success": True, "message": "Collection deleted successfully"}
