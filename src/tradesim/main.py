"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradesim import __version__
from tradesim.app_context import AppContext
from tradesim.config.logging_config import setup_logging
from tradesim.api.routers import commands_router, users_router, quotes_router
from tradesim.core.exceptions import (
    AppError,
    NotFoundError,
    SymbolNotFoundError,
    RateLimitedError,
    QuoteTransportError,
    PersistenceError,
)


def status_for(exc: AppError) -> int:
    """HTTP status for an application error."""
    if isinstance(exc, (NotFoundError, SymbolNotFoundError)):
        return 404
    if isinstance(exc, RateLimitedError):
        return 429
    if isinstance(exc, (QuoteTransportError, PersistenceError)):
        return 503
    return 400


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the FastAPI app around an AppContext."""
    context = context or AppContext()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(context.settings)
        context.initialize()
        yield
        context.close()

    app = FastAPI(
        title=context.settings.app_name,
        description="Virtual stock-trading simulator driven by text commands",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    app.include_router(commands_router)
    app.include_router(users_router)
    app.include_router(quotes_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=status_for(exc),
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": context.settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
