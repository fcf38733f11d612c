"""Exceptions raised by the upstream API clients."""


class UpstreamError(Exception):
    """An upstream call failed: non-2xx response or transport error.

    `status_code` is the upstream HTTP status, or None when no response was
    received at all.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (upstream status {self.status_code})"


class UpstreamNotFoundError(UpstreamError):
    """The upstream reported 404 for the requested resource."""


class UpstreamConfigurationError(UpstreamError):
    """Base URL or API key for the upstream is not configured."""
