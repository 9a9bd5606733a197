import logging

from .outcome import Attempt

logger = logging.getLogger(__name__)

DDL_CREATE = [
    """CREATE TABLE IF NOT EXISTS process_logs (
        id SERIAL PRIMARY KEY,
        data TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT NOW()
    )""",
]


async def run(datastore) -> Attempt:
    attempt = Attempt.succeeded()
    for sql in DDL_CREATE:
        try:
            await datastore.execute(sql)
        except Exception as e:
            logger.warning("BOOTSTRAP CREATE WARN: %r", e)
            attempt = Attempt.failed(e)
    return attempt


async def ensure(datastore, enabled: bool = True) -> Attempt:
    """Create the storage schema if absent. Faults are returned, never raised."""
    if not enabled:
        logger.info("BOOTSTRAP: RUN_MIGRATIONS disabled")
        return Attempt.succeeded()
    attempt = await run(datastore)
    if attempt.ok:
        logger.info("Database table initialized successfully")
    else:
        logger.warning("Database initialization failed (this is OK if DB is not available): %s", attempt.message)
    return attempt
