"""
S3 object storage operations.

Uploads, presigned GET/PUT links, single-key and prefix deletes. The service
holds no state besides its boto3 client; every operation is idempotent at the
object-key level.
"""

from dataclasses import dataclass
from typing import Any

import boto3
from loguru import logger as log

from common import global_config
from src.utils.logging_config import setup_logging

setup_logging()


@dataclass
class Buckets:
    """Bucket names by role."""

    designs: str
    processing: str
    previews: str
    orders: str
    uploads: str


@dataclass
class PresignExpiry:
    """Presigned URL lifetimes, in seconds."""

    download: int = 3600
    upload: int = 900
    direct_upload: int = 3600


class S3Service:
    def __init__(
        self,
        client: Any,
        buckets: Buckets,
        region: str,
        expiry: PresignExpiry | None = None,
    ):
        self.client = client
        self.buckets = buckets
        self.region = region
        self.expiry = expiry or PresignExpiry()

    @classmethod
    def from_config(cls) -> "S3Service":
        """
        Build the service from global config.

        Explicit access keys are used only when both are configured; otherwise
        boto3 resolves credentials through its default chain (IAM role on AWS).
        """
        region = global_config.aws_region
        client = boto3.client(
            "s3", region_name=region, **global_config.aws_credentials()
        )
        presign = global_config.storage.presign
        return cls(
            client=client,
            buckets=Buckets(
                designs=global_config.bucket("designs"),
                processing=global_config.bucket("processing"),
                previews=global_config.bucket("previews"),
                orders=global_config.bucket("orders"),
                uploads=global_config.bucket("uploads"),
            ),
            region=region,
            expiry=PresignExpiry(
                download=presign.download_expiry,
                upload=presign.upload_expiry,
                direct_upload=presign.direct_upload_expiry,
            ),
        )

    def upload_file(
        self,
        body: bytes,
        bucket: str,
        key: str,
        content_type: str,
        encrypt: bool = False,
    ) -> None:
        """Upload a payload to bucket/key; `encrypt` adds SSE-S3 (AES256)."""
        params: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if encrypt:
            params["ServerSideEncryption"] = "AES256"

        self.client.put_object(**params)
        log.info(f"Uploaded s3://{bucket}/{key} ({len(body)} bytes, {content_type})")

    def generate_download_url(
        self, bucket: str, key: str, expires_in: int | None = None
    ) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in or self.expiry.download,
        )

    def generate_upload_url(
        self,
        bucket: str,
        key: str,
        content_type: str,
        expires_in: int | None = None,
    ) -> str:
        return self.client.generate_presigned_url(
            "put_object",
            Params={"Bucket": bucket, "Key": key, "ContentType": content_type},
            ExpiresIn=expires_in or self.expiry.upload,
        )

    def delete_file(self, bucket: str, key: str) -> None:
        self.client.delete_object(Bucket=bucket, Key=key)
        log.info(f"Deleted s3://{bucket}/{key}")

    def delete_folder(self, bucket: str, prefix: str) -> int:
        """
        Delete every object under a prefix, one key at a time.

        Not atomic: if a delete fails the error propagates and the objects
        already removed stay removed.

        Returns:
            int: Number of objects deleted
        """
        folder_prefix = prefix if prefix.endswith("/") else f"{prefix}/"

        paginator = self.client.get_paginator("list_objects_v2")
        deleted = 0
        for page in paginator.paginate(Bucket=bucket, Prefix=folder_prefix):
            for obj in page.get("Contents", []):
                key = obj.get("Key")
                if key:
                    self.delete_file(bucket, key)
                    deleted += 1

        log.info(f"Deleted {deleted} objects under s3://{bucket}/{folder_prefix}")
        return deleted

    def get_order_design_url(self, key: str) -> str:
        return self.generate_download_url(self.buckets.orders, key)

    def get_order_preview_url(self, key: str) -> str:
        return self.generate_download_url(self.buckets.orders, key)

    def public_url(self, bucket: str, key: str) -> str:
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"
