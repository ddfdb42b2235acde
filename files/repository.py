import logging
from typing import Any, List, Mapping, Sequence

import asyncpg
from fastapi import Depends

from config.database import get_connection
from .exceptions import StoreQueryFailure

logger = logging.getLogger(__name__)

# Errors raised by the driver for bad statements, bad arguments or a lost connection
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class FileStore:
    """Runs positional-placeholder statements against the user_files/physical_files join."""

    def __init__(self, connection):
        self.connection = connection

    async def count(self, sql: str, args: Sequence[Any]) -> int:
        try:
            return await self.connection.fetchval(sql, *args)
        except STORE_ERRORS as e:
            logger.error(f"Search count query failed: {str(e)}")
            raise StoreQueryFailure("Failed to count filtered files") from e

    async def fetch(self, sql: str, args: Sequence[Any]) -> List[Mapping[str, Any]]:
        try:
            return await self.connection.fetch(sql, *args)
        except STORE_ERRORS as e:
            logger.error(f"Search query failed: {str(e)}")
            raise StoreQueryFailure("Failed to retrieve filtered files") from e


async def get_file_store(connection=Depends(get_connection)) -> FileStore:
    return FileStore(connection)
