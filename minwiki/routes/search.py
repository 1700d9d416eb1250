#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Search router
=============
GET /api/v1/search?q=...   — substring search over page titles and bodies

Unlike the HTML search page, a store failure here is a plain 500.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from minwiki.schemas import SearchHit
from minwiki.services.pages import PageStore, get_store, snippet


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/search", tags=["search"])


# -----------------------------------------------------------------------------

@router.get("", response_model=list[SearchHit])
async def search(
    q: str = Query("", max_length=256, description="Text to look for; empty matches every page"),
    store: PageStore = Depends(get_store),
):
    pages = await store.search(q)
    return [SearchHit(id=p.id, title=p.title, snippet=snippet(p, q)) for p in pages]


# -----------------------------------------------------------------------------
