#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

Values are read, highest priority first, from constructor arguments,
environment variables, a .env file and finally a JSON config file
(``config.json`` by default, override with ``MINWIKI_CONFIG``).  The JSON
file uses the legacy keys ``dbuser``, ``dbpass``, ``dbaddr`` and ``dbname``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from functools import lru_cache

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from sqlalchemy.engine import URL

from minwiki._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./minwiki.db"


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "MinWiki"
    app_version: str = _pkg_version
    site_name: str = "MinWiki"
    front_page: str = "FrontPage"

    # ── Server ─────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # ── Database ───────────────────────────────────────────────────────────

    database_url: str | None = None
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10
    create_tables: bool = True

    # Legacy config.json connection parameters (MySQL)
    dbuser: str = ""
    dbpass: str = ""
    dbaddr: str = ""
    dbname: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.environ.get("MINWIKI_CONFIG", "config.json")
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
            file_secret_settings,
        )

    @property
    def resolved_database_url(self) -> str:
        """The SQLAlchemy URL to connect to."""
        if self.database_url:
            return self.database_url
        if self.dbaddr:
            host, _, port = self.dbaddr.partition(":")
            url = URL.create(
                "mysql+aiomysql",
                username=self.dbuser or None,
                password=self.dbpass or None,
                host=host,
                port=int(port) if port else None,
                database=self.dbname or None,
            )
            return url.render_as_string(hide_password=False)
        return DEFAULT_DATABASE_URL


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
