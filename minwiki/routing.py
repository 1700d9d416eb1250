#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Path router
===========
Decodes a request path of the form ``/<action>/<title>``::

    "/view/FrontPage"    -> Route(Action.VIEW, "FrontPage")
    "/save/Abc123"       -> Route(Action.SAVE, "Abc123")
    "/view/Abc 123"      -> RouteMismatch
    "/view/Abc/extra"    -> RouteMismatch

Titles are one or more ASCII letters or digits.  Nothing is normalised:
no case folding, no trimming, no partial matches.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from minwiki.core.errors import RouteMismatch


# -----------------------------------------------------------------------------

TITLE_PATTERN = r"[a-zA-Z0-9]+"


# -----------------------------------------------------------------------------

class Action(str, Enum):
    VIEW   = "view"
    EDIT   = "edit"
    SAVE   = "save"
    SEARCH = "search"


_PATH_RE = re.compile(
    r"/(" + "|".join(a.value for a in Action) + r")/(" + TITLE_PATTERN + r")"
)


# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Route:
    """A decoded request: the action and the title it applies to."""

    action: Action
    title: str

    @property
    def path(self) -> str:
        return f"/{self.action.value}/{self.title}"


# -----------------------------------------------------------------------------

def decode_path(path: str) -> Route:
    """Split *path* into a ``Route`` or raise ``RouteMismatch``."""
    m = _PATH_RE.fullmatch(path)
    if m is None:
        raise RouteMismatch(path)
    return Route(Action(m.group(1)), m.group(2))


# -----------------------------------------------------------------------------
