import asyncio
import logging

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import declarative_base

from files.exceptions import StoreQueryFailure
from .settings import settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()

# Connection pool shared by all requests
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    pool_pre_ping=True,
)

# Raised when the pool cannot hand out a connection (database down, refused, timed out)
CHECKOUT_ERRORS = (DBAPIError, OSError, asyncio.TimeoutError)


async def get_connection():
    """Checks a connection out of the pool and yields the underlying asyncpg connection.

    Statements are sent with positional ``$n`` placeholders, which asyncpg
    accepts natively, so the driver connection is used instead of the
    SQLAlchemy wrapper. A failed checkout is reported like a failed count,
    since the count is the first statement of every search.
    """
    try:
        conn = await engine.connect()
    except CHECKOUT_ERRORS as e:
        logger.error(f"Database connection checkout failed: {str(e)}")
        raise StoreQueryFailure("Failed to count filtered files") from e

    try:
        try:
            raw = await conn.get_raw_connection()
        except CHECKOUT_ERRORS as e:
            logger.error(f"Database connection checkout failed: {str(e)}")
            raise StoreQueryFailure("Failed to count filtered files") from e
        yield raw.driver_connection
    finally:
        await conn.close()
