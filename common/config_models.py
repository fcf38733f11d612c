"""
Pydantic models for global configuration structure.
This module defines all the nested configuration models used by the Config class.
Each model corresponds to a section in the global_config.yaml file and provides
type validation and structure for the configuration data.
"""

from pydantic import BaseModel


class LoggingLocationConfig(BaseModel):
    """Location information display configuration for logging."""

    enabled: bool
    show_file: bool
    show_function: bool
    show_line: bool
    show_for_info: bool
    show_for_debug: bool
    show_for_warning: bool
    show_for_error: bool


class LoggingFormatConfig(BaseModel):
    """Logging format configuration."""

    show_time: bool
    show_session_id: bool
    location: LoggingLocationConfig


class LoggingLevelsConfig(BaseModel):
    """Logging level configuration."""

    debug: bool
    info: bool
    warning: bool
    error: bool
    critical: bool


class LoggingConfig(BaseModel):
    """Complete logging configuration."""

    verbose: bool
    format: LoggingFormatConfig
    levels: LoggingLevelsConfig


class ServerConfig(BaseModel):
    """Server configuration."""

    allowed_origins: list[str]


class AdminApiConfig(BaseModel):
    """Upstream admin and collections API configuration."""

    base_url: str
    collections_base_url: str
    timeout_seconds: float


class BucketsConfig(BaseModel):
    """Object storage bucket names."""

    designs: str
    processing: str
    previews: str
    orders: str
    uploads: str


class PresignConfig(BaseModel):
    """Presigned URL expiries, in seconds."""

    download_expiry: int
    upload_expiry: int
    direct_upload_expiry: int


class StorageConfig(BaseModel):
    """Object storage configuration."""

    region: str
    buckets: BucketsConfig
    presign: PresignConfig


class CdnConfig(BaseModel):
    """CloudFront configuration."""

    distribution_id: str
    invalidate_buckets: list[str]


class SecretsConfig(BaseModel):
    """Secrets store configuration."""

    secret_id: str
    default_mongodb_uri: str
    default_database_name: str


class OrdersConfig(BaseModel):
    """Order listing configuration."""

    fetch_limit: int
    sales_fetch_limit: int
    default_page_size: int
    max_page_size: int


class CollectionsConfig(BaseModel):
    """Collection mutation configuration."""

    write_enabled: bool
