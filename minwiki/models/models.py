#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM Models for MinWiki
======================

Tables
------
pages   — one row per wiki page, keyed by its unique title

The body is stored as a BLOB, byte for byte.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from sqlalchemy import Integer, LargeBinary, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from minwiki.core.database import Base


# ----------------------------------------------------------------------------

TITLE_MAX_LENGTH = 255


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageRecord(Base):
    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("title", name="uq_pages_title"),
    )

    id:    Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    body:  Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")

    def __repr__(self) -> str:
        return f"<PageRecord id={self.id} title={self.title!r}>"
