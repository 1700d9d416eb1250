#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Jinja2 UI views (server-rendered HTML pages)
============================================
GET       /                  — redirect to the front page
GET|POST  /view/{title}      — show a page (missing pages redirect to edit)
GET|POST  /edit/{title}      — edit form (missing pages start empty)
GET|POST  /save/{title}      — store form field ``body``, redirect to view
GET|POST  /search/{token}    — pages whose title or body contains ``body``

Every other path is a 404.  Paths are decoded by ``minwiki.routing``, not by
FastAPI's own path matching, so this router must be included last.  The path
is taken from the ASGI scope exactly as received, with nothing trimmed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.datastructures import UploadFile

from minwiki.core.config import get_settings
from minwiki.routing import Action, Route, decode_path
from minwiki.services.dispatch import Dispatcher, Redirect, get_dispatcher
from minwiki.services.renderer import render


# -----------------------------------------------------------------------------

router = APIRouter(tags=["ui"])


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

async def _fields(request: Request) -> dict[str, str]:
    """Query string fields, overridden by form fields on POST."""
    fields = dict(request.query_params)
    if request.method == "POST":
        form = await request.form()
        fields.update(
            (key, value) for key, value in form.items()
            if not isinstance(value, UploadFile)
        )
    return fields


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Home
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/", include_in_schema=False)
async def home():
    front = Route(Action.VIEW, get_settings().front_page)
    return RedirectResponse(url=front.path, status_code=302)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# /<action>/<title>
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.api_route("/{path:path}", methods=["GET", "POST"], include_in_schema=False)
async def wiki(
    request: Request,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    # The raw decoded path: the ``path`` parameter loses a trailing newline.
    route = decode_path(request.scope["path"])
    outcome = await dispatcher.dispatch(route, await _fields(request))
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.location, status_code=302)
    return render(request, outcome)


# -----------------------------------------------------------------------------
