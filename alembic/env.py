"""Alembic environment configuration for async SQLAlchemy.

This module configures Alembic to work with async database operations.
The database URL always comes from Settings, never from alembic.ini.
"""

import asyncio
import sys
from logging.config import fileConfig
from typing import TYPE_CHECKING

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

from alembic import context
from warden.core.config import get_settings
from warden.infrastructure.persistence.base import BaseModel

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", get_settings().database_url)

# Registers every table on BaseModel.metadata for autogenerate
import warden.infrastructure.persistence.models  # noqa: E402, F401

target_metadata = BaseModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    This configures the context with just a URL and not an Engine.
    Calls to context.execute() emit the given string to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection.

    Args:
        connection: SQLAlchemy connection to use for migrations.
    """
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def _should_run_seeders() -> bool:
    """Run seeders during `alembic upgrade` (online) or when forced via -x seed=1."""
    xargs = context.get_x_argument(as_dictionary=True)
    flag = (xargs.get("run_seeders") or xargs.get("seed") or "").strip().lower()
    forced = flag in {"1", "true", "yes", "y"}

    if "--sql" in sys.argv:
        return forced

    cmd_opts = getattr(config, "cmd_opts", None)
    is_upgrade = getattr(cmd_opts, "cmd", None) == "upgrade"
    if not is_upgrade:
        argv_lower = " ".join(sys.argv).lower()
        is_upgrade = " upgrade" in argv_lower or argv_lower.endswith("upgrade")

    return is_upgrade or forced


async def run_async_migrations() -> None:
    """Run migrations in async mode, then the idempotent seeders."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    if _should_run_seeders():
        await _run_seeders(connectable)

    await connectable.dispose()


async def _run_seeders(engine: "AsyncEngine") -> None:
    """Execute idempotent seeders after migrations.

    Args:
        engine: Async database engine.
    """
    import os

    from sqlalchemy.ext.asyncio import async_sessionmaker

    # Add alembic directory to path for local seeds import
    alembic_dir = os.path.dirname(__file__)
    if alembic_dir not in sys.path:
        sys.path.insert(0, alembic_dir)

    from seeds import run_all_seeders  # noqa: E402

    async_session = async_sessionmaker(engine, expire_on_commit=False)

    async with async_session() as session:
        await run_all_seeders(session)
        await session.commit()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode using async engine."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
