#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas: the Page value handed between store, dispatcher and
templates, plus the request / response bodies of the JSON API.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Domain
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Page(BaseModel):
    """A wiki page.

    ``id`` is 0 until the store has persisted the page.  ``links`` is only
    filled in for search results and is never persisted.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str         = Field(..., min_length=1)
    body:  bytes       = b""
    id:    int         = 0
    links: list[str]   = Field(default_factory=list)

    def text(self) -> str:
        """Body decoded for display; undecodable bytes are replaced."""
        return self.body.decode("utf-8", errors="replace")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# JSON API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageBody(BaseModel):
    body: str = Field(default="", max_length=1_000_000)


# -----------------------------------------------------------------------------

class PageResponse(BaseModel):
    id:    int
    title: str
    body:  str

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(id=page.id, title=page.title, body=page.text())


# -----------------------------------------------------------------------------

class SearchHit(BaseModel):
    id:      int
    title:   str
    snippet: str


# -----------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status:  str
    version: str
    app:     str
    pages:   int
