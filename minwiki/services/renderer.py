#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Template rendering for the HTML UI.

Templates live in ``minwiki/templates`` and are named after the action that
renders them: ``view.html``, ``edit.html``, ``search.html``, plus
``error.html`` for 404 / 500 pages.  Jinja2 autoescaping is on for all of
them, so page bodies are shown as text, never as markup.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from minwiki.core.config import get_settings
from minwiki.services.dispatch import Render


# -----------------------------------------------------------------------------

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


# -----------------------------------------------------------------------------

def _ctx(**extra) -> dict:
    """Base template context (request passed separately to TemplateResponse)."""
    settings = get_settings()
    return {
        "site_name": settings.site_name,
        "app_version": settings.app_version,
        **extra,
    }


# -----------------------------------------------------------------------------

def render(request: Request, outcome: Render) -> Response:
    return templates.TemplateResponse(
        request,
        f"{outcome.template}.html",
        _ctx(page=outcome.page, notice=outcome.notice),
        status_code=outcome.status,
    )


def render_error(request: Request, message: str, status_code: int) -> Response:
    return templates.TemplateResponse(
        request,
        "error.html",
        _ctx(message=message, status_code=status_code),
        status_code=status_code,
    )


# -----------------------------------------------------------------------------
