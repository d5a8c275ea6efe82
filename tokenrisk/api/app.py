"""FastAPI application factory for the token risk API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from config.settings import Settings, settings as default_settings
from tokenrisk.api.dependencies import API_VERSION, limiter
from tokenrisk.api.middleware import SecurityHeadersMiddleware
from tokenrisk.services.container import ServiceContainer
from tokenrisk.services.errors import AnalysisError


async def _analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    content: dict = {"error": exc.message}
    if exc.example is not None:
        content["example"] = exc.example
    return JSONResponse(status_code=400, content=content)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container = await ServiceContainer(settings).open()
        app.state.container = container
        logger.info("[API] Services ready")
        try:
            yield
        finally:
            await container.close()

    app = FastAPI(
        title="Token Risk API",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.api_debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(AnalysisError, _analysis_error_handler)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from tokenrisk.api.routers.health import router as health_router
    from tokenrisk.api.routers.token_lists import router as token_lists_router
    from tokenrisk.api.routers.tokens import router as tokens_router

    app.include_router(health_router)
    app.include_router(tokens_router)
    app.include_router(token_lists_router)

    @app.get("/")
    async def index() -> dict:
        return {
            "message": "Token Risk API",
            "version": API_VERSION,
            "endpoints": {
                "checkToken": "POST /api/check-token",
                "checkTokenQuery": "GET /api/check-token?contractAddress=&network=",
                "checkSymbol": "GET /api/check-symbol/{symbol}",
                "tokenLists": "GET /api/token-lists?minRisk=50",
                "tokenListStats": "GET /api/token-lists/stats",
                "categories": "GET /api/categories",
                "health": "GET /api/health",
            },
            "description": (
                "Spam, scam and gap-hunter bot risk scoring for tokens by contract address "
                "or symbol"
            ),
        }

    return app
