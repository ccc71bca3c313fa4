"""API routers for the REST API."""

from calepinage.web.routers.area import router as area_router
from calepinage.web.routers.editor import router as editor_router
from calepinage.web.routers.layout import router as layout_router
from calepinage.web.routers.validate import router as validate_router

__all__ = [
    "area_router",
    "editor_router",
    "layout_router",
    "validate_router",
]
