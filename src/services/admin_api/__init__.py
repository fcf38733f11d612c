"""Upstream admin API client."""

from .client import AdminApiClient
from .exceptions import (
    UpstreamConfigurationError,
    UpstreamError,
    UpstreamNotFoundError,
)

__all__ = [
    "AdminApiClient",
    "UpstreamConfigurationError",
    "UpstreamError",
    "UpstreamNotFoundError",
]
