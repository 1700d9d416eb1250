#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page store
==========
Load / save / search for wiki pages held in the ``pages`` table.

Saves are a single INSERT ... ON CONFLICT (or ON DUPLICATE KEY) statement, so
two concurrent saves of a new title cannot both insert.  The last writer wins.

Bodies are opaque bytes in a binary column and come back exactly as saved.

Search is a LIKE over title and body with ``%`` and ``_`` escaped.  Whether it
is case-sensitive depends on the database: SQLite folds ASCII case on both
columns, MySQL only on titles since bodies compare bytewise.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from minwiki.core.errors import NotFoundError, StoreError
from minwiki.models import PageRecord
from minwiki.schemas import Page

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _to_page(row: PageRecord) -> Page:
    if row.body is None:
        raise StoreError(f"Stored page {row.title!r} has no body")
    return Page(id=row.id, title=row.title, body=bytes(row.body))


def _upsert_statement(dialect: str, title: str, body: bytes):
    """INSERT keyed on the unique title, updating body on conflict."""
    values = {"title": title, "body": body}

    if dialect in ("sqlite", "postgresql"):
        insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
        stmt = insert(PageRecord).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[PageRecord.title],
            set_={"body": stmt.excluded.body},
        )

    if dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(PageRecord).values(**values)
        return stmt.on_duplicate_key_update(body=stmt.inserted.body)

    raise StoreError(f"Upsert is not supported on the {dialect!r} dialect")


def _body_contains(text: str):
    """LIKE on the binary body column; ``/`` is the escape character."""
    needle = text.encode("utf-8")
    for ch in (b"/", b"%", b"_"):
        needle = needle.replace(ch, b"/" + ch)
    return PageRecord.body.like(b"%" + needle + b"%", escape="/")


def snippet(page: Page, text: str, before: int = 80, after: int = 160) -> str:
    """A short excerpt of the body around the first match of *text*."""
    content = page.text()
    idx = content.lower().find(text.lower()) if text else -1
    if idx >= 0:
        start = max(0, idx - before)
        end   = min(len(content), idx + after)
        excerpt = content[start:end].replace("\n", " ")
        return ("..." if start else "") + excerpt + ("..." if end < len(content) else "")
    excerpt = content[:after].replace("\n", " ")
    return excerpt + ("..." if len(content) > after else "")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Store
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageStore:
    """Keyed page storage over an async SQLAlchemy engine.

    Every call runs in its own session and returns fresh ``Page`` values
    with no link back to the session.  Nothing is retried.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    # -------------------------------------------------------------------------

    async def load(self, title: str) -> Page:
        """Return the page stored under exactly *title*.

        Raises ``NotFoundError`` when there is none and ``StoreError`` for
        anything else that goes wrong reading it.
        """
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(PageRecord).where(PageRecord.title == title)
                )
                row = result.scalar_one_or_none()
                if row is None:
                    raise NotFoundError(title)
                return _to_page(row)
        except (SQLAlchemyError, ValidationError) as exc:
            raise StoreError(f"Loading page {title!r} failed", exc) from exc

    # -------------------------------------------------------------------------

    async def save(self, page: Page) -> None:
        """Insert *page*, or replace the body of the page with its title."""
        stmt = _upsert_statement(self.dialect, page.title, page.body)
        try:
            async with self._session_factory.begin() as db:
                await db.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"Saving page {page.title!r} failed", exc) from exc
        log.info("Saved page %r (%d bytes)", page.title, len(page.body))

    # -------------------------------------------------------------------------

    async def search(self, text: str) -> list[Page]:
        """Pages whose title or body contains *text*; empty text matches all.

        Order is whatever the database returns.
        """
        q = select(PageRecord).where(
            PageRecord.title.contains(text, autoescape=True)
            | _body_contains(text)
        )
        try:
            async with self._session_factory() as db:
                result = await db.execute(q)
                return [_to_page(row) for row in result.scalars().all()]
        except (SQLAlchemyError, ValidationError) as exc:
            raise StoreError(f"Searching for {text!r} failed", exc) from exc

    # -------------------------------------------------------------------------

    async def count(self) -> int:
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(func.count()).select_from(PageRecord))
                return result.scalar_one()
        except SQLAlchemyError as exc:
            raise StoreError("Counting pages failed", exc) from exc

    # -------------------------------------------------------------------------

    async def titles(self) -> list[str]:
        """All stored titles, alphabetically."""
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(PageRecord.title).order_by(PageRecord.title))
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise StoreError("Listing pages failed", exc) from exc


# -----------------------------------------------------------------------------

def get_store(request: Request) -> PageStore:
    """FastAPI dependency returning the store the app was started with."""
    return request.app.state.store


# -----------------------------------------------------------------------------
