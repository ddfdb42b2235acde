"""Alembic environment for the user_files / physical_files schema.

Uses the same DATABASE_URL as the application. Offline mode renders SQL for
review; online mode runs through the async engine.
"""
import asyncio
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context

# Project root, so config/ and models/ import as they do in the app
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from config.settings import settings  # noqa: E402
from models import Base  # noqa: E402

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

SCHEMA_OPTIONS = {"target_metadata": Base.metadata, "compare_type": True}


def apply_migrations(**configure_kwargs):
    context.configure(**SCHEMA_OPTIONS, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_database():
    migration_engine = create_async_engine(settings.DATABASE_URL)
    try:
        async with migration_engine.connect() as connection:
            await connection.run_sync(lambda sync_conn: apply_migrations(connection=sync_conn))
    finally:
        await migration_engine.dispose()


if context.is_offline_mode():
    apply_migrations(url=settings.DATABASE_URL, literal_binds=True)
else:
    asyncio.run(migrate_database())
