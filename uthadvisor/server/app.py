"""
FastAPI Application Entry Point for the UTH advisor.

This module creates and configures the FastAPI application with:
- HTTP routes for classification, advice, session and stats
- CORS middleware for a separately served front end
- Stats loaded on startup and saved on shutdown
"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uthadvisor import __version__
from uthadvisor.config import Settings
from uthadvisor.server import routes
from uthadvisor.server.routes import router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """
    Configure root logging for the server process.

    Raises:
        ValueError: If level is not a standard level name
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Server settings; read from the environment if omitted

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="UTH Advisor",
        description="Ultimate Texas Hold'em strategy advisor API",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include HTTP routes
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event():
        routes.configure(settings)
        logger.info("UTH Advisor server starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        routes.save_stats()
        logger.info("UTH Advisor server shutting down...")

    return app


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "uthadvisor.server.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
