"""
Upload Routes

Direct uploads to S3 and presigned PUT links for browser-side uploads.
"""

import asyncio

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile
from loguru import logger as log

from common import global_config
from src.api.dependencies import get_cdn, get_storage
from src.api.errors import aws_call, bad_request
from src.services.storage import CloudFrontService, S3Service
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(prefix="/api/upload", tags=["Upload"])

DIRECT_UPLOAD_PREFIX = "uploads"


def needs_invalidation(bucket: str, content_type: str) -> bool:
    """Images in CDN-fronted buckets must be evicted from the edge cache."""
    if not content_type.startswith("image/"):
        return False
    return bucket in global_config.cdn_invalidate_buckets()


@router.post("")
async def upload_file(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(None),
    bucket: str | None = Form(None),
    key: str | None = Form(None),
    storage: S3Service = Depends(get_storage),
    cdn: CloudFrontService = Depends(get_cdn),
):
    """
    Upload a file straight to S3 with server-side encryption.

    A CDN invalidation for the key runs after the response is sent; its
    failure is only logged.
    """
    if file is None or not bucket or not key:
        raise bad_request("Missing required fields: file, bucket, or key")

    content_type = file.content_type or "application/octet-stream"
    body = await file.read()
    with aws_call("Failed to upload file"):
        await asyncio.to_thread(
            storage.upload_file, body, bucket, key, content_type, encrypt=True
        )

    if needs_invalidation(bucket, content_type):
        background_tasks.add_task(cdn.invalidate_quietly, [key])

    return {"success": True, "key": key, "bucket": bucket}


@router.get("")
def get_upload_url(
    bucket: str | None = Query(None),
    key: str | None = Query(None),
    content_type: str | None = Query(None, alias="contentType"),
    storage: S3Service = Depends(get_storage),
):
    if not bucket or not key or not content_type:
        raise bad_request("Bucket, key, and contentType are required")

    with aws_call("Failed to generate upload URL"):
        upload_url = storage.generate_upload_url(bucket, key, content_type)
    return {"uploadUrl": upload_url, "key": key, "bucket": bucket}


@router.get("/presign")
def presign_upload(
    file_name: str | None = Query(None, alias="fileName"),
    content_type: str | None = Query(None, alias="contentType"),
    bucket: str | None = Query(None),
    storage: S3Service = Depends(get_storage),
):
    """Presigned PUT for `uploads/<fileName>`, plus the object's public URL."""
    if not file_name:
        raise bad_request("Missing required parameter: fileName")
    if not content_type:
        raise bad_request("Missing required parameter: contentType")

    bucket = bucket or storage.buckets.uploads
    key = f"{DIRECT_UPLOAD_PREFIX}/{file_name}"
    log.info(f"Generating presigned upload URL for s3://{bucket}/{key}")

    with aws_call("Failed to generate presigned URL"):
        upload_url = storage.generate_upload_url(
            bucket, key, content_type, expires_in=storage.expiry.direct_upload
        )
    return {
        "success": True,
        "uploadUrl": upload_url,
        "fileUrl": storage.public_url(bucket, key),
        "key": key,
        "bucket": bucket,
    }
