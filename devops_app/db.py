import asyncio
import logging
from typing import Any

import asyncpg

from .config import Settings

logger = logging.getLogger(__name__)


class Datastore:
    """Pooled PostgreSQL handle. Each call borrows one connection and returns it."""

    def __init__(self, pool: asyncpg.pool.Pool, acquire_timeout: float = 2.0, drain_timeout: float = 10.0):
        self._pool = pool
        self._acquire_timeout = acquire_timeout
        self._drain_timeout = drain_timeout

    @classmethod
    async def open(cls, settings: Settings) -> "Datastore":
        # min_size=0: nothing connects until the first request needs a connection
        pool = await asyncpg.create_pool(
            min_size=0,
            max_size=settings.pool_max,
            max_inactive_connection_lifetime=settings.idle_timeout,
            timeout=settings.connect_timeout,
            **settings.connect_kwargs(),
        )
        return cls(pool, acquire_timeout=settings.connect_timeout, drain_timeout=settings.drain_timeout)

    async def fetchval(self, query: str, *args: Any) -> Any:
        async with self._pool.acquire(timeout=self._acquire_timeout) as conn:
            return await conn.fetchval(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        async with self._pool.acquire(timeout=self._acquire_timeout) as conn:
            return await conn.execute(query, *args)

    async def close(self) -> None:
        try:
            await asyncio.wait_for(self._pool.close(), timeout=self._drain_timeout)
        except asyncio.TimeoutError:
            logger.warning("Pool did not drain within %.1fs, terminating connections", self._drain_timeout)
            self._pool.terminate()
        else:
            logger.info("Database pool closed")
