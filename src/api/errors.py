"""
Error envelope and upstream error mapping.

Every error leaves the service as `{"error": "<message>"}` with an HTTP
status chosen locally: 400 for bad input, 404 for missing resources, 500 for
upstream or transport failures, 501 for unavailable operations.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger as log
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.services.admin_api.exceptions import UpstreamError, UpstreamNotFoundError
from src.utils.logging_config import setup_logging

setup_logging()


class ApiError(HTTPException):
    """HTTPException whose body carries extra keys next to `error`."""

    def __init__(self, status_code: int, message: str, **extra: Any):
        super().__init__(status_code=status_code, detail=message)
        self.extra = extra


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def not_implemented(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail=message)


@contextmanager
def upstream_call(failure_message: str, not_found_message: str | None = None) -> Iterator[None]:
    """
    Map upstream failures raised inside the block to HTTP errors.

    Upstream 404 becomes a local 404 when a not-found message is given;
    every other failure becomes a 500 with the static failure message.
    """
    try:
        yield
    except UpstreamNotFoundError as e:
        if not_found_message:
            log.warning(f"{not_found_message}: {e}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=not_found_message
            ) from e
        log.error(f"{failure_message}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message
        ) from e
    except UpstreamError as e:
        log.error(f"{failure_message}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message
        ) from e


@contextmanager
def aws_call(failure_message: str) -> Iterator[None]:
    """Map boto3 failures raised inside the block to a 500 envelope."""
    try:
        yield
    except (BotoCoreError, ClientError) as e:
        log.error(f"{failure_message}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message
        ) from e


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = str(detail.get("error") or detail.get("message") or detail)
    else:
        message = str(detail)
    extra = getattr(exc, "extra", {})
    return error_response(exc.status_code, message, **extra)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(
            str(part) for part in first.get("loc", ()) if part not in ("body", "query")
        )
        if location:
            message += f": {location}"
        message += f": {first.get('msg')}"
    log.warning(f"{request.method} {request.url.path} rejected: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def upstream_exception_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    # Reached only when a route let an upstream failure escape
    log.error(f"Unhandled upstream error on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Upstream request failed")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UpstreamError, upstream_exception_handler)  # type: ignore[arg-type]

