"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- The in-memory URL registry owned by this instance
- API routes
- Middleware (logging, CORS)
- Rate limiting
- Application metadata

Run with:
    uvicorn shortener.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shortener.api import endpoints
from shortener.core.logging_config import setup_logging
from shortener.core.rate_limit import limiter
from shortener.core.setting import settings
from shortener.middleware.logging import add_logging_middleware
from shortener.registry import UrlRegistry

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)


def create_app(registry: Optional[UrlRegistry] = None) -> FastAPI:
    """
    Build the application around a registry.

    Args:
        registry: Registry to serve; a new empty one when omitted
    """
    app = FastAPI(
        title="URL Shortener Service",
        description="Shortens URLs into an in-memory registry and tracks clicks",
        version="1.0.0",
        docs_url="/docs",  # Swagger UI documentation
        redoc_url="/redoc",  # ReDoc documentation
    )

    app.state.registry = registry if registry is not None else UrlRegistry()

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints defined before router to match before catch-all route
    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint for health checks."""
        return {
            "message": "URL Shortener Service",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "urls": len(app.state.registry)}

    app.include_router(endpoints.router, tags=["URL Shortener"])

    return app


app = create_app()
