#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Database engine lifecycle.

There is no process-wide engine: callers acquire one with ``engine_scope()``
and hand it to ``PageStore``.  The engine is disposed when the scope exits.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .config import get_settings

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
    pass


# -----------------------------------------------------------------------------

def make_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    settings = get_settings()
    db_url  = url  or settings.resolved_database_url
    db_echo = echo if echo is not None else settings.db_echo

    kwargs: dict = {}
    if "sqlite" in db_url:
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url:
            # One shared connection, otherwise every checkout sees an empty db
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"]    = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
        kwargs["pool_pre_ping"] = True

    return create_async_engine(db_url, echo=db_echo, **kwargs)


# -----------------------------------------------------------------------------

@asynccontextmanager
async def engine_scope(url: str | None = None, echo: bool | None = None) -> AsyncIterator[AsyncEngine]:
    """Create an engine for the duration of the ``async with`` block."""
    engine = make_engine(url, echo)
    log.info("Database engine opened (%s)", engine.url.render_as_string(hide_password=True))
    try:
        yield engine
    finally:
        await engine.dispose()
        log.info("Database engine disposed")


# -----------------------------------------------------------------------------

async def create_all_tables(engine: AsyncEngine) -> None:
    """Create all tables (dev / test only — use Alembic in production)."""
    from minwiki.models import models  # noqa: F401  — registers ORM models on Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# -----------------------------------------------------------------------------

async def drop_all_tables(engine: AsyncEngine) -> None:
    """Drop all tables (tests only)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# -----------------------------------------------------------------------------
