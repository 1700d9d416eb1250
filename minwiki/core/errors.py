#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
MinWiki exception hierarchy.

Shared by the router, dispatcher, page store and HTTP layer so every module
raises and catches the same types.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations


# -----------------------------------------------------------------------------

class WikiError(Exception):
    """Base for all minwiki-specific errors."""


# -----------------------------------------------------------------------------

class NotFoundError(WikiError):
    """No stored page has this title.

    Recoverable: the dispatcher turns it into a redirect or an empty
    edit scaffold.
    """

    def __init__(self, title: str) -> None:
        super().__init__(f"{title}: no page exists")
        self.title = title


# -----------------------------------------------------------------------------

class StoreError(WikiError):
    """The backing store failed (connectivity, driver, schema or bad row).

    ``cause`` is the underlying exception; it is also chained as
    ``__cause__`` by the raiser.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        detail = f"{message}: {cause}" if cause is not None else message
        super().__init__(detail)
        self.cause = cause


# -----------------------------------------------------------------------------

class RouteMismatch(WikiError):  # noqa: N818 — mirrors NotFound-style naming
    """The request path does not decode to ``/<action>/<title>``."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No route matches {path!r}")
        self.path = path


# -----------------------------------------------------------------------------
