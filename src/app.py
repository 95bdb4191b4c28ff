"""SweetShop FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:create_app --factory --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from content.domain import content
from identity.domain import identity
from ordering.domain import ordering
from shared.api import register_exception_handlers
from shared.config import Settings, get_settings
from shared.database import init_domains as initialize_domains
from shared.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)

DOMAINS = (identity, ordering, content)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/admin/users": identity,
    "/carts": ordering,
    "/orders": ordering,
    "/admin/orders": ordering,
    "/admin": content,
    "/content": content,
}


def _resolve_domain(path: str, api_prefix: str = ""):
    """Return the domain owning ``path``; the longest matching prefix wins."""
    for prefix in sorted(_ROUTE_DOMAIN_MAP, key=len, reverse=True):
        if path.startswith(f"{api_prefix}{prefix}"):
            return _ROUTE_DOMAIN_MAP[prefix]
    return None


def create_app(settings: Settings | None = None, init_domains: bool = True) -> FastAPI:
    """Build the application.

    With ``init_domains`` the domains are configured from ``settings``,
    initialized and their tables created. A protean domain initializes once
    per process, so callers that already did that (tests) pass False.
    """
    settings = settings or get_settings()
    configure_logging(settings.env, settings.log_level, settings.log_dir)

    if init_domains:
        initialize_domains(DOMAINS, settings)

    app = FastAPI(
        title="SweetShop API",
        description="Dessert storefront: accounts, carts, orders and site content",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path, settings.api_prefix)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: health check, docs
        return await call_next(request)

    @app.middleware("http")
    async def logging_context_middleware(request: Request, call_next):
        """Bind the request path and method into every log line of the request."""
        clear_context()
        add_context(path=request.url.path, method=request.method)
        try:
            return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    from content.api import admin_router as content_admin_router
    from content.api import public_router as content_public_router
    from identity.api import admin_router as identity_admin_router
    from identity.api import router as identity_router
    from ordering.api import admin_order_router, cart_router, order_router

    for router in (
        identity_router,
        identity_admin_router,
        cart_router,
        order_router,
        admin_order_router,
        content_admin_router,
        content_public_router,
    ):
        app.include_router(router, prefix=settings.api_prefix)

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    @app.get(f"{settings.api_prefix}/health", include_in_schema=False)
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "domains": [domain.name for domain in DOMAINS],
        }

    logger.info("Application created", env=settings.env, api_prefix=settings.api_prefix)
    return app
