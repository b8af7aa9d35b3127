import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core.config import settings
from db.sessions.database import init_db, shutdown_db

logger = logging.getLogger("core.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.info("Starting up FastAPI application...")
        logger.info(
            f"Database config loaded: host={settings.POSTGRES_HOST}, "
            f"port={settings.POSTGRES_PORT}, db={settings.POSTGRES_DB}"
        )

        await init_db()
        logger.info("Database initialized")

        yield

    except Exception as e:
        logger.exception(f"Startup failed: {e}")
        raise
    finally:
        await shutdown_db()
        logger.info("FastAPI application shutdown.")
