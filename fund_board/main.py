"""
FastAPI Main Application
Read-side API for the fund board: history series, portfolio stats, holdings
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from fund_board.config import settings
from fund_board.core.logging import setup_logging
from fund_board.infrastructure.db.database import init_db, close_db
from fund_board.api.routes import funds, health, history

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Opens and closes the database
    """
    logger.info("=" * 60)
    logger.info("Starting Fund Board API")
    logger.info("=" * 60)

    logger.info("Initializing database...")
    await init_db()
    logger.info("Database initialized")

    logger.info(f"API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"Environment: {settings.APP_ENV}, timezone: {settings.TIMEZONE}")

    yield

    logger.info("Closing database connections...")
    await close_db()
    logger.info("Fund Board API shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fund Board",
        description="Fund holdings, NAV history and drawdown analysis",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(history.router, prefix="/api", tags=["History"])
    app.include_router(funds.router, prefix="/api", tags=["Funds"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fund_board.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
