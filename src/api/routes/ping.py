"""
Ping Route

Liveness probe for the load balancer and the dashboard.
"""

from datetime import datetime, timezone
from fastapi import APIRouter
from pydantic import BaseModel

from common import global_config

router = APIRouter()


class PingResponse(BaseModel):
    """Response for ping endpoint."""

    message: str
    status: str
    environment: str
    timestamp: str


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(
        message="pong",
        status="ok",
        environment=global_config.DEV_ENV,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
