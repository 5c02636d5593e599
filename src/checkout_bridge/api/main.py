"""FastAPI application entry point for the Checkout Bridge service."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from checkout_bridge import __version__
from checkout_bridge.api.errors import install_exception_handlers
from checkout_bridge.api.middleware import install_middleware
from checkout_bridge.api.routes import paypal_router, shopify_router
from checkout_bridge.config import Settings, get_settings
from checkout_bridge.logging_config import configure_logging

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given (or environment) settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Log configuration problems at startup; nothing to tear down."""
        logger.info(
            "starting_checkout_bridge",
            environment=settings.environment,
            paypal_env=settings.paypal.env,
            shopify_store=settings.shopify.store,
            allowed_origins=settings.origin_allow_list,
        )
        if not settings.paypal.credentials_configured:
            logger.warning("missing_paypal_credentials")
        if not settings.shopify.credentials_configured:
            logger.warning("missing_shopify_credentials")

        yield

        logger.info("checkout_bridge_shutdown_complete")

    app = FastAPI(
        title="Checkout Bridge",
        description="PayPal checkout to Shopify order bridge",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    install_middleware(app, settings)
    install_exception_handlers(app)

    app.include_router(paypal_router)
    app.include_router(shopify_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    return app


# Configure logging at module level
configure_logging(get_settings())

app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "checkout_bridge.api.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
        log_level="debug" if _settings.debug else "info",
    )
