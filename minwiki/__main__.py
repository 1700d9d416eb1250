#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Command line entry point.

    python -m minwiki serve [--host HOST] [--port PORT] [--reload]
    python -m minwiki init-db
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from minwiki.core.config import get_settings
from minwiki.core.database import create_all_tables, engine_scope

log = logging.getLogger("minwiki")


# -----------------------------------------------------------------------------

def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "minwiki.main:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


# -----------------------------------------------------------------------------

async def _init_db() -> None:
    async with engine_scope() as engine:
        await create_all_tables(engine)


def _cmd_init_db(args: argparse.Namespace) -> int:
    asyncio.run(_init_db())
    log.info("Schema created")
    return 0


# -----------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="minwiki", description="Minimal wiki server.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default=None, help="Bind address (default: settings.host)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: settings.port)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=_serve)

    p_init = sub.add_parser("init-db", help="Create the pages table if it does not exist")
    p_init.set_defaults(func=_cmd_init_db)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    return args.func(args)


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
