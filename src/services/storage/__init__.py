"""Object storage and CDN services."""

from .cdn_service import CloudFrontService
from .s3_service import Buckets, PresignExpiry, S3Service

__all__ = ["Buckets", "CloudFrontService", "PresignExpiry", "S3Service"]
