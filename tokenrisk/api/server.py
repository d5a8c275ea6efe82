"""API server: uvicorn inside the running asyncio event loop."""

from __future__ import annotations

import uvicorn
from loguru import logger

from config.settings import settings


async def run_api_server() -> None:
    """Serve the FastAPI app until uvicorn exits (SIGINT/SIGTERM)."""
    from tokenrisk.api.app import create_app

    app = create_app(settings)
    config = uvicorn.Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="warning",
        loop="none",  # use the existing event loop
    )
    server = uvicorn.Server(config)
    logger.info(f"Token risk API starting on http://{settings.api_host}:{settings.api_port}")
    await server.serve()
