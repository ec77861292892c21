"""API routers for the REST API."""

from cutplan.web.routers.pack import router as pack_router

__all__ = ["pack_router"]
