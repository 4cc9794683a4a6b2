"""Application configuration, read from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DATABASE_URL = "sqlite:///./chess_mcp.db"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 3456
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from a mapping of environment variables (defaults to os.environ)."""
    env = os.environ if environ is None else environ
    return Settings(
        database_url=env.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
        host=env.get("HOST", "0.0.0.0"),
        port=int(env.get("PORT", "3456")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        sql_echo=_as_bool(env.get("SQL_ECHO", "0")),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
