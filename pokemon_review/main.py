import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy import text

from pokemon_review import config
from pokemon_review.db import engine, run_migrations
from pokemon_review.errors import install_error_handlers
from pokemon_review.routers import all_routers
from pokemon_review.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup/shutdown hook.

    Startup runs before the app starts serving requests and
    creates any missing tables.
    """
    if config.RUN_SCHEMA_BOOTSTRAP:
        await run_migrations()
    logger.info("Pokemon Review Service started")
    yield
    await engine.dispose()


app = FastAPI(title="Pokemon Review Service", lifespan=lifespan)

install_error_handlers(app)
for router in all_routers:
    app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health endpoint.

    Checks:
    - App is running
    - Database is reachable (simple SELECT 1)
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.warning("Health check could not reach the database: %s", e)
        db_status = f"error: {e!s}"

    return {
        "status": "ok",
        "db": db_status,
    }


def run() -> None:
    """Entry point for the `pokemon-review` console script."""
    config.configure_logging()
    uvicorn.run(app, host=config.HOST, port=config.PORT)
