"""
ClimaSite Storefront - FastAPI application.

REST layer over the mediator: endpoints translate HTTP to commands and
queries, the lifespan owns the database engine and the event bus.
"""
import time
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from apps.api.errors import register_exception_handlers
from apps.api.v1.router import api_router
from core.application.mediator import HandlerContext, Mediator
from core.infrastructure.database.config import create_engine, create_session_factory
from core.infrastructure.database.lifecycle import dispose_engine, init_database
from core.infrastructure.event_bus import InMemoryEventBus
from core.infrastructure.logging import configure_logging, get_logger
from core.infrastructure.notifications import register_default_subscribers
from core.settings import AppSettings, get_app_settings

logger = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Application settings (defaults to environment / .env)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_app_settings()
    configure_logging(settings.api.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 ClimaSite API starting up...")
        engine = create_engine(settings.database)
        await init_database(engine)

        event_bus = InMemoryEventBus()
        register_default_subscribers(event_bus, settings.store.low_stock_alerts)

        context = HandlerContext(
            session_factory=create_session_factory(engine),
            settings=settings.store,
            event_bus=event_bus,
        )
        app.state.mediator = Mediator(context)
        logger.info("✅ API ready")

        yield

        logger.info("👋 ClimaSite API shutting down...")
        await dispose_engine(engine)

    app = FastAPI(
        title=settings.api.title,
        description="HVAC storefront: catalog, cart, checkout, orders, wishlists and product Q&A.",
        version=settings.api.version,
        lifespan=lifespan,
    )

    # =========================================================================
    # CORS
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    # =========================================================================
    # REQUEST LOGGING
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()
        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )
        return response

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health_check() -> Dict[str, str]:
        """Liveness probe."""
        return {"status": "healthy", "version": settings.api.version}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("apps.api.main:app", host="0.0.0.0", port=8000, reload=False)
