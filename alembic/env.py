#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Alembic environment for MinWiki.

* Reads the database URL from the app Settings (DATABASE_URL, the legacy
  config.json keys, or .env) so no credentials ever live in alembic.ini.
* Uses the async engine (aiomysql / aiosqlite).
* Imports the ORM models so autogenerate can diff the full schema.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# ── App imports ──────────────────────────────────────────────────────────────
from minwiki.core.database import Base
from minwiki.core.config import get_settings
import minwiki.models.models  # noqa: F401  — registers all ORM models on Base


# ── Alembic config object ────────────────────────────────────────────────────

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()
# ConfigParser interpolation: '%' must be doubled
config.set_main_option("sqlalchemy.url", settings.resolved_database_url.replace("%", "%%"))

target_metadata = Base.metadata


# ── Offline mode (generates SQL script without a live connection) ─────────────

def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


# ── Online mode (connects to the DB and runs migrations) ─────────────────────

def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


# ── Entry point ───────────────────────────────────────────────────────────────

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
