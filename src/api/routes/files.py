"""
File Routes

File operations used by the design editor: uploads forwarded to the admin
API, CDN cache invalidation, presigned downloads and deletes.
"""

import asyncio

from fastapi import APIRouter, Depends, Request
from loguru import logger as log
from pydantic import BaseModel, Field

from src.api.dependencies import get_admin_api, get_cdn, get_storage
from src.api.errors import aws_call, bad_request, upstream_call
from src.api.multipart import split_form
from src.services.admin_api import AdminApiClient
from src.services.storage import CloudFrontService, S3Service
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(prefix="/api/files", tags=["Files"])


class InvalidateRequest(BaseModel):
    paths: list[str] = Field(min_length=1)


class ObjectRequest(BaseModel):
    bucket: str | None = None
    key: str | None = None


class DeleteRequest(ObjectRequest):
    prefix: str | None = None


@router.post("/upload")
async def upload_file(
    request: Request, admin_api: AdminApiClient = Depends(get_admin_api)
):
    """Forward a multipart upload (file, bucket, key, content_type) to the admin API."""
    files, data = await split_form(await request.form())
    if "file" not in files or not data.get("bucket") or not data.get("key"):
        raise bad_request("Missing required fields: file, bucket, or key")

    log.info(f"Forwarding upload of {data['key']} to bucket {data['bucket']}")
    with upstream_call("Failed to upload file"):
        return await asyncio.to_thread(admin_api.upload_file, files, data)


@router.post("/cache/invalidate")
def invalidate_cache(
    payload: InvalidateRequest, cdn: CloudFrontService = Depends(get_cdn)
):
    with aws_call("Failed to invalidate cache"):
        invalidation_id = cdn.invalidate(payload.paths)
    return {"success": True, "invalidationId": invalidation_id, "paths": payload.paths}


@router.post("/download-url")
def get_download_url(
    payload: ObjectRequest, storage: S3Service = Depends(get_storage)
):
    if not payload.bucket or not payload.key:
        raise bad_request("Missing required fields: bucket or key")

    with aws_call("Failed to generate download URL"):
        url = storage.generate_download_url(payload.bucket, payload.key)
    return {"success": True, "url": url, "bucket": payload.bucket, "key": payload.key}


@router.delete("")
def delete_files(payload: DeleteRequest, storage: S3Service = Depends(get_storage)):
    """Delete one object (`key`) or every object under a folder (`prefix`)."""
    if not payload.bucket or bool(payload.key) == bool(payload.prefix):
        raise bad_request("Missing required fields: bucket and either key or prefix")

    if payload.key:
        with aws_call("Failed to delete file"):
            storage.delete_file(payload.bucket, payload.key)
        return {"success": True, "deleted": 1}

    with aws_call("Failed to delete folder"):
        deleted = storage.delete_folder(payload.bucket, payload.prefix)
    return {"success": True, "deleted": deleted}
