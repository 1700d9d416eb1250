#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pages router
============
GET    /api/v1/pages            — list titles
GET    /api/v1/pages/{title}    — get a page
PUT    /api/v1/pages/{title}    — create or replace a page's body
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from minwiki.core.errors import NotFoundError
from minwiki.routing import TITLE_PATTERN
from minwiki.schemas import Page, PageBody, PageResponse
from minwiki.services.pages import PageStore, get_store


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/pages", tags=["pages"])

Title = Annotated[str, Path(pattern=f"^{TITLE_PATTERN}$", description="Page title (ASCII letters and digits)")]


# ── List ─────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[str])
async def list_titles(store: PageStore = Depends(get_store)):
    return await store.titles()


# ── Read ──────────────────────────────────────────────────────────────────────

@router.get("/{title}", response_model=PageResponse)
async def get_page(
    title: Title,
    store: PageStore = Depends(get_store),
):
    try:
        page = await store.load(title)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PageResponse.from_page(page)


# ── Save ──────────────────────────────────────────────────────────────────────

@router.put("/{title}", response_model=PageResponse)
async def save_page(
    title: Title,
    data: PageBody,
    store: PageStore = Depends(get_store),
):
    await store.save(Page(title=title, body=data.body.encode("utf-8")))
    page = await store.load(title)
    return PageResponse.from_page(page)


# -----------------------------------------------------------------------------
