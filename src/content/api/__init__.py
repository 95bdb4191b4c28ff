"""Content domain API package."""

from content.api.routes import admin_router, public_router

__all__ = ["admin_router", "public_router"]
