from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import os
from fastapi.routing import APIRouter
from human_id import generate_id
from loguru import logger as log
from src.api.dependencies import build_services
from src.api.errors import register_exception_handlers
from src.utils.context import request_id
from src.utils.logging_config import setup_logging
from common import global_config

# Setup logging before anything else
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Upstream clients and the secrets cache live for the whole process
    app.state.services = build_services()
    log.info(f"Admin API: {global_config.admin_api_base_url} ({global_config.DEV_ENV})")
    try:
        yield
    finally:
        app.state.services.close()


# Initialize FastAPI app
app = FastAPI(title="Cover Art Admin API", lifespan=lifespan)

# Add CORS middleware with specific allowed origins
app.add_middleware(  # type: ignore[call-overload]
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=global_config.server.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    """Tag every log line of a request with one id, echoed back to the caller."""
    current_id = request.headers.get("X-Request-ID") or generate_id()
    token = request_id.set(current_id)
    try:
        response = await call_next(request)
    finally:
        request_id.reset(token)
    response.headers["X-Request-ID"] = current_id
    return response


register_exception_handlers(app)


# Automatically discover and include all routers
def include_all_routers():
    from src.api.routes import all_routers

    main_router = APIRouter()
    for router in all_routers:
        main_router.include_router(router)

    return main_router


app.include_router(include_all_routers())


if __name__ == "__main__":
    # Configure uvicorn to use our logging config
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        log_config=None,  # Disable uvicorn's logging config
        access_log=True,  # Enable access logs
    )
