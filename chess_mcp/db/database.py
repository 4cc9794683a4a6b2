"""Generate database sessions. The engine (and its connection pool) lives for the whole process."""

import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_mcp.core.config import get_settings
from chess_mcp.db.schema import Base

logger = logging.getLogger(__name__)

settings = get_settings()
engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    connect_args={"check_same_thread": False} if settings.is_sqlite else {},
)
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def init_db() -> None:
    """Ensure all tables are created"""
    logger.info("Creating tables (if missing) on %s", engine.url.render_as_string())
    Base.metadata.create_all(bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
