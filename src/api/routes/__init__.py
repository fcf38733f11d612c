"""
API Routes Package

This package contains all API route modules. When adding a new route:
1. Create your route module in this directory
2. Import the router here with a descriptive name (e.g., `router as <feature>_router`)
3. Add it to the `all_routers` list
4. The router will be automatically included in the FastAPI app
"""

from .ping import router as ping_router
from .designs import router as designs_router
from .collections import router as collections_router
from .orders import router as orders_router
from .partners import router as partners_router
from .prompt_templates import router as prompt_templates_router
from .render_assets import router as render_assets_router
from .upload import router as upload_router
from .files import router as files_router

# List of all routers to be included in the application
# Add new routers to this list when creating new endpoints
all_routers = [
    ping_router,
    designs_router,
    collections_router,
    orders_router,
    partners_router,
    prompt_templates_router,
    render_assets_router,
    upload_router,
    files_router,
]

__all__ = [
    "all_routers",
    "ping_router",
    "designs_router",
    "collections_router",
    "orders_router",
    "partners_router",
    "prompt_templates_router",
    "render_assets_router",
    "upload_router",
    "files_router",
]
