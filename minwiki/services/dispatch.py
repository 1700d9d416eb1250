#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Action dispatcher
=================
Turns a decoded ``Route`` into an outcome for the HTTP layer:

view    load the page; a missing page redirects to its edit form
edit    load the page; a missing page yields an empty page to fill in
save    upsert the submitted body, then redirect to the view
search  substring search; a store failure is reported, not hidden

Store errors on view / edit / save propagate to the caller.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from fastapi import Depends

from minwiki.core.errors import NotFoundError, StoreError
from minwiki.routing import Action, Route
from minwiki.schemas import Page
from minwiki.services.pages import PageStore, get_store

log = logging.getLogger(__name__)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Outcomes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True, slots=True)
class Redirect:
    location: str


@dataclass(frozen=True, slots=True)
class Render:
    template: str
    page: Page
    status: int = 200
    notice: str | None = None


Outcome = Redirect | Render


# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchResult:
    """Either the matching pages, or the error that prevented the search."""

    pages: list[Page] = field(default_factory=list)
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Dispatcher
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

SEARCH_FAILED_NOTICE = "Search is unavailable right now; no results could be retrieved."


class Dispatcher:
    """Per-request policy on top of a ``PageStore``.  Holds no request state."""

    def __init__(self, store: PageStore) -> None:
        self.store = store
        self._handlers = {
            Action.VIEW:   self._view,
            Action.EDIT:   self._edit,
            Action.SAVE:   self._save,
            Action.SEARCH: self._search,
        }

    async def dispatch(self, route: Route, fields: Mapping[str, str]) -> Outcome:
        """Run the handler for *route*.  *fields* are the submitted form fields."""
        return await self._handlers[route.action](route, fields)

    # ── Operations ──────────────────────────────────────────────────────────

    async def search(self, text: str) -> SearchResult:
        try:
            pages = await self.store.search(text)
        except StoreError as exc:
            log.error("Search for %r failed: %s", text, exc, exc_info=exc)
            return SearchResult(error=exc)
        return SearchResult(pages=pages)

    # ── Handlers ────────────────────────────────────────────────────────────

    async def _view(self, route: Route, fields: Mapping[str, str]) -> Outcome:
        try:
            page = await self.store.load(route.title)
        except NotFoundError:
            log.debug("No page %r; redirecting to edit", route.title)
            return Redirect(Route(Action.EDIT, route.title).path)
        return Render("view", page)

    async def _edit(self, route: Route, fields: Mapping[str, str]) -> Outcome:
        try:
            page = await self.store.load(route.title)
        except NotFoundError:
            page = Page(title=route.title)
        return Render("edit", page)

    async def _save(self, route: Route, fields: Mapping[str, str]) -> Outcome:
        body = fields.get("body", "")
        await self.store.save(Page(title=route.title, body=body.encode("utf-8")))
        return Redirect(Route(Action.VIEW, route.title).path)

    async def _search(self, route: Route, fields: Mapping[str, str]) -> Outcome:
        result = await self.search(fields.get("body", ""))
        page = Page(title="search", links=[p.title for p in result.pages])
        if not result.ok:
            return Render("search", page, status=500, notice=SEARCH_FAILED_NOTICE)
        return Render("search", page)


# -----------------------------------------------------------------------------

def get_dispatcher(store: PageStore = Depends(get_store)) -> Dispatcher:
    """FastAPI dependency: a dispatcher over the app's store."""
    return Dispatcher(store)


# -----------------------------------------------------------------------------
