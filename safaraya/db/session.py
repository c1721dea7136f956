import logging

import asyncpg
from asyncpg.pool import Pool

from safaraya.core.config import get_settings

logger = logging.getLogger(__name__)

db_pool: Pool | None = None


async def get_pool() -> Pool:
    global db_pool
    if db_pool is None:
        await connect_db_pool()
    return db_pool


async def connect_db_pool():
    global db_pool
    if db_pool is None:
        settings = get_settings()
        try:
            db_pool = await asyncpg.create_pool(
                dsn=settings.asyncpg_url,
                min_size=settings.DB_POOL_MIN_SIZE,
                max_size=settings.DB_POOL_MAX_SIZE,
                timeout=30,
            )
            logger.info("database connection pool established")
        except Exception:
            logger.exception("failed to init db")
            raise


async def close_db_pool():
    global db_pool
    if db_pool:
        await db_pool.close()
        db_pool = None
        logger.info("database connection pool closed")

