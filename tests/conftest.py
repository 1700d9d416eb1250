#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for MinWiki tests.
Uses an in-memory SQLite database so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from minwiki.core.database import create_all_tables, drop_all_tables
from minwiki.main import create_app
from minwiki.services.pages import PageStore


# -----------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all_tables(engine)
    yield engine
    await drop_all_tables(engine)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def store(db_engine):
    return PageStore(db_engine)


@pytest_asyncio.fixture(scope="function")
async def broken_store(db_engine):
    """A store whose table has gone away: every query fails in the driver."""
    await drop_all_tables(db_engine)
    yield PageStore(db_engine)
    await create_all_tables(db_engine)


@pytest_asyncio.fixture(scope="function")
async def client(store):
    """HTTP test client wired to an isolated in-memory DB."""
    app = create_app(store=store)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


class CrashingStore(PageStore):
    """Fails with an error that is not a StoreError, as a template bug would."""

    async def load(self, title):
        raise RuntimeError("boom: SELECT * FROM pages")

    async def titles(self):
        raise RuntimeError("boom: SELECT * FROM pages")


@pytest_asyncio.fixture(scope="function")
async def crashing_client(db_engine):
    app = create_app(store=CrashingStore(db_engine))
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def broken_client(broken_store):
    app = create_app(store=broken_store)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

async def save_page(client: AsyncClient, title: str, body: str) -> None:
    resp = await client.post(f"/save/{title}", data={"body": body})
    assert resp.status_code == 302, resp.text


# -----------------------------------------------------------------------------
