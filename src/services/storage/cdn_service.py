"""CloudFront cache invalidation."""

import time
from typing import Any

import boto3
from loguru import logger as log

from common import global_config
from src.utils.logging_config import setup_logging

setup_logging()


def normalize_paths(paths: list[str]) -> list[str]:
    """CloudFront paths must start with a slash."""
    return [path if path.startswith("/") else f"/{path}" for path in paths]


class CloudFrontService:
    def __init__(self, client: Any, distribution_id: str):
        self.client = client
        self.distribution_id = distribution_id

    @classmethod
    def from_config(cls) -> "CloudFrontService":
        client = boto3.client(
            "cloudfront",
            region_name=global_config.aws_region,
            **global_config.aws_credentials(),
        )
        return cls(client, global_config.cloudfront_distribution_id)

    def invalidate(self, paths: list[str]) -> str:
        """
        Create an invalidation for the given paths.

        Returns:
            str: The CloudFront invalidation id
        """
        if not paths:
            raise ValueError("At least one path is required")

        items = normalize_paths(paths)
        response = self.client.create_invalidation(
            DistributionId=self.distribution_id,
            InvalidationBatch={
                "CallerReference": str(int(time.time() * 1000)),
                "Paths": {"Quantity": len(items), "Items": items},
            },
        )
        invalidation_id = response["Invalidation"]["Id"]
        log.info(
            f"Created CloudFront invalidation {invalidation_id} for {len(items)} path(s)"
        )
        return invalidation_id

    def invalidate_quietly(self, paths: list[str]) -> str | None:
        """Invalidate without raising; failures are only logged."""
        try:
            return self.invalidate(paths)
        except Exception as e:
            log.error(f"CloudFront invalidation failed for {paths}: {str(e)}")
            return None
