"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chat_widget import __version__
from chat_widget.config import Settings, get_settings
from chat_widget.core.rate_limiter import limiter
from chat_widget.core.webhook import WebhookClient
from chat_widget.features.chat.router import router as chat_router
from chat_widget.features.chat.sanitizer import redact_url
from chat_widget.features.chat.service import ChatProxyHandler
from chat_widget.features.widget.router import router as widget_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the proxy handler once and close its HTTP client on shutdown."""
        logging.basicConfig(level=settings.log_level.upper())
        webhook = WebhookClient(timeout=settings.webhook_timeout)
        app.state.chat_proxy = ChatProxyHandler(settings=settings, webhook=webhook)
        logger.info(
            "Starting chat widget proxy: env=%s webhook=%s",
            settings.app_env,
            redact_url(settings.webhook_url) if settings.webhook_url else "unset",
        )
        yield
        await webhook.aclose()
        logger.info("Shutting down chat widget proxy")

    app = FastAPI(
        title="Chat Widget Proxy",
        description="Embeddable chat widget backed by an automation webhook",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
    )

    app.state.settings = settings

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(chat_router)
    app.include_router(widget_router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": __version__}

    # API info endpoint
    @app.get("/")
    async def root():
        return {
            "name": "Chat Widget Proxy",
            "version": __version__,
            "docs": "/docs" if settings.app_debug else None,
            "widget": "/widget/embed",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "chat_widget.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
    )
